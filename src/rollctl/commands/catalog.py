"""Command group: catalog rule checks and helpers."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from rollctl.commands._base import RollGroup

if TYPE_CHECKING:
    from rollctl.commands._context import AppContext

_FILE = click.Path(dir_okay=False, path_type=Path)

_catalogs_option = click.option(
    "--catalogs",
    "catalogs_path",
    type=_FILE,
    required=True,
    help="JSON array of current catalog records.",
)
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
  rollctl catalog check-create new-catalog.json --catalogs catalogs.json
  rollctl catalog check-update c-1 patch.json --catalogs catalogs.json --records rolls.json
  rollctl catalog check-delete c-1 --catalogs catalogs.json --records rolls.json
  rollctl catalog stats catalogs.json
  rollctl catalog suggest-code "Premium Cotton 2024\"""",
)
def catalog() -> None:
    """Catalog rule checks."""


@catalog.command("check-create")
@click.argument("payload", type=_FILE)
@_catalogs_option
@click.pass_obj
def check_create(app: AppContext, payload: Path, catalogs_path: Path) -> None:
    """Check a catalog create payload (format, then code uniqueness)."""
    from rollctl.domain.models import CreateCatalogDTO

    op = "catalog_check_create"
    dto = app.payload(op, payload, CreateCatalogDTO)
    catalogs = app.catalogs(op, catalogs_path)
    app.emit(app.catalog_service().validate_create(dto, catalogs))


@catalog.command("check-update")
@click.argument("catalog_id")
@click.argument("patch", type=_FILE)
@_catalogs_option
@_records_option
@click.pass_obj
def check_update(
    app: AppContext,
    catalog_id: str,
    patch: Path,
    catalogs_path: Path,
    records_path: Path,
) -> None:
    """Check a patch to CATALOG_ID."""
    from rollctl.domain.models import UpdateCatalogDTO

    op = "catalog_check_update"
    dto = app.payload(op, patch, UpdateCatalogDTO)
    catalogs = app.catalogs(op, catalogs_path)
    current = app.lookup(op, catalogs, catalog_id, "catalog")
    rolls = app.rolls(op, records_path)
    app.emit(app.catalog_service().validate_update(current, dto, rolls))


@catalog.command("check-delete")
@click.argument("catalog_id")
@_catalogs_option
@_records_option
@click.pass_obj
def check_delete(app: AppContext, catalog_id: str, catalogs_path: Path, records_path: Path) -> None:
    """Check whether CATALOG_ID may be deleted (no rolls may reference it)."""
    op = "catalog_check_delete"
    catalogs = app.catalogs(op, catalogs_path)
    current = app.lookup(op, catalogs, catalog_id, "catalog")
    rolls = app.rolls(op, records_path)
    app.emit(app.catalog_service().validate_delete(current, rolls))


@catalog.command("stats")
@click.argument("catalogs_path", metavar="CATALOGS", type=_FILE)
@click.pass_obj
def stats(app: AppContext, catalogs_path: Path) -> None:
    """Count the catalogs in CATALOGS by status."""
    catalogs = app.catalogs("catalog_stats", catalogs_path)
    app.emit(app.catalog_service().stats(catalogs))


@catalog.command("suggest-code")
@click.argument("name")
@click.pass_obj
def suggest_code(app: AppContext, name: str) -> None:
    """Suggest a catalog code for NAME."""
    app.emit(app.catalog_service().suggest_code(name))
