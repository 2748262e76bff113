"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``.  Builds the rule services from settings, loads input
snapshots, and emits results with the right stream and exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import click

from rollctl.infrastructure.snapshots import (
    SnapshotError,
    find_by_id,
    load_catalogs,
    load_payload,
    load_rolls,
)
from rollctl.output.formatters import OutputSettings, format_result
from rollctl.services.result import ServiceResult

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from pydantic import BaseModel

    from rollctl.config.settings import RollctlSettings
    from rollctl.domain.models import Catalog, Roll
    from rollctl.services.catalogs import CatalogRulesService
    from rollctl.services.rolls import RollRulesService

_T = TypeVar("_T")
_M = TypeVar("_M", bound="BaseModel")


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Input helpers never return on failure: a missing file, malformed JSON,
    or unknown ID is emitted as a failed result and the process exits 1.
    """

    def __init__(self, settings: RollctlSettings) -> None:
        self.settings = settings

        from rollctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from rollctl.services.telemetry import enable_telemetry

            enable_telemetry()

    # ── Services ─────────────────────────────────────────────────────

    def roll_service(self) -> RollRulesService:
        from rollctl.services.rolls import RollRulesService

        return RollRulesService(self.settings.rolls)

    def catalog_service(self) -> CatalogRulesService:
        from rollctl.services.catalogs import CatalogRulesService

        return CatalogRulesService(self.settings.catalogs)

    # ── Input ────────────────────────────────────────────────────────

    def rolls(self, op: str, path: Path) -> list[Roll]:
        return self._load(op, lambda: load_rolls(path))

    def catalogs(self, op: str, path: Path) -> list[Catalog]:
        return self._load(op, lambda: load_catalogs(path))

    def payload(self, op: str, path: Path, model: type[_M]) -> _M:
        return self._load(op, lambda: load_payload(path, model))

    def lookup(self, op: str, records: list[_M], record_id: str, kind: str) -> _M:
        found = find_by_id(records, record_id)
        if found is None:
            self.fail(
                ServiceResult.failure(
                    op, "NOT_FOUND", f"No {kind} found with ID: {record_id}", id=record_id
                )
            )
        return found

    def _load(self, op: str, load: Callable[[], _T]) -> _T:
        try:
            return load()
        except SnapshotError as exc:
            self.fail(
                ServiceResult.failure(
                    op, "INVALID_INPUT", str(exc), path=str(exc.path), reason=exc.reason
                )
            )

    # ── Output ───────────────────────────────────────────────────────

    def _format(self, result: ServiceResult) -> str:
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        return format_result(result, settings=settings)

    def emit(self, result: ServiceResult) -> None:
        """Write a ServiceResult and set exit semantics.

        * Success: stdout, exit 0.  Warnings go to stderr outside JSON mode.
        * Failure: stderr, exit 1.
        """
        if not result.ok:
            self.fail(result)
        click.echo(self._format(result))
        if not self.settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)

    def fail(self, result: ServiceResult) -> NoReturn:
        click.echo(self._format(result), err=True)
        raise SystemExit(1)
