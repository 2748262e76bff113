"""Command: roll counts by status and catalog."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from rollctl.commands._base import RollCommand

if TYPE_CHECKING:
    from rollctl.commands._context import AppContext


@click.command(
    cls=RollCommand,
    examples="""\
  rollctl stats rolls.json
  rollctl --json stats rolls.json""",
)
@click.argument("records_path", metavar="RECORDS", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def stats(app: AppContext, records_path: Path) -> None:
    """Count the rolls in RECORDS by status and by catalog."""
    records = app.rolls("stats", records_path)
    app.emit(app.roll_service().stats(records))
