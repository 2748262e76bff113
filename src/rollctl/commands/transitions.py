"""Command: show the statuses a roll can move to."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rollctl.commands._base import RollCommand
from rollctl.domain.types import RollStatus

if TYPE_CHECKING:
    from rollctl.commands._context import AppContext


@click.command(
    cls=RollCommand,
    examples="""\
  rollctl transitions in_stock
  rollctl -q transitions reserved""",
)
@click.argument("status", type=click.Choice([s.value for s in RollStatus]))
@click.pass_obj
def transitions(app: AppContext, status: str) -> None:
    """List the allowed next statuses for STATUS."""
    app.emit(app.roll_service().transitions(RollStatus(status)))
