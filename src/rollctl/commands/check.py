"""Command group: check proposed roll mutations against the business rules."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from rollctl.commands._base import RollGroup

if TYPE_CHECKING:
    from rollctl.commands._context import AppContext

_FILE = click.Path(dir_okay=False, path_type=Path)

_records_option = click.option(
    "--records",
    "records_path",
    type=_FILE,
    required=True,
    help="JSON array of current roll records.",
)


@click.group(
    cls=RollGroup,
    examples="""\
  rollctl check create new-roll.json --records rolls.json
  rollctl check update r-42 patch.json --records rolls.json
  rollctl --json check delete r-42 --records rolls.json""",
)
def check() -> None:
    """Check a roll create, update, or delete before applying it."""


@check.command()
@click.argument("payload", type=_FILE)
@_records_option
@click.pass_obj
def create(app: AppContext, payload: Path, records_path: Path) -> None:
    """Check a create payload (field rules, then barcode availability)."""
    from rollctl.domain.models import CreateRollDTO

    op = "check_create"
    dto = app.payload(op, payload, CreateRollDTO)
    records = app.rolls(op, records_path)
    app.emit(app.roll_service().validate_create(dto, records))


@check.command()
@click.argument("roll_id")
@click.argument("patch", type=_FILE)
@_records_option
@click.pass_obj
def update(app: AppContext, roll_id: str, patch: Path, records_path: Path) -> None:
    """Check a patch to ROLL_ID (transition, field rules, sold lock, barcode)."""
    from rollctl.domain.models import UpdateRollDTO

    op = "check_update"
    dto = app.payload(op, patch, UpdateRollDTO)
    records = app.rolls(op, records_path)
    current = app.lookup(op, records, roll_id, "roll")
    app.emit(app.roll_service().validate_update(current, dto, records))


@check.command()
@click.argument("roll_id")
@_records_option
@click.pass_obj
def delete(app: AppContext, roll_id: str, records_path: Path) -> None:
    """Check whether ROLL_ID may be deleted."""
    op = "check_delete"
    records = app.rolls(op, records_path)
    current = app.lookup(op, records, roll_id, "roll")
    app.emit(app.roll_service().validate_delete(current))
