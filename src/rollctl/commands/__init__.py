"""Subcommand modules for rollctl.

register_commands() imports lazily so ``rollctl --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root group."""
    from rollctl.commands.catalog import catalog
    from rollctl.commands.check import check

    cli.add_command(check)
    cli.add_command(catalog)

    from rollctl.commands.stats import stats
    from rollctl.commands.transitions import transitions

    cli.add_command(transitions)
    cli.add_command(stats)
