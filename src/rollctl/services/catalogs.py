"""CatalogRulesService — guard pipeline for catalog mutations.

- create: FIELDS → CODE UNIQUENESS
- update: IMMUTABLE CODE → ARCHIVE-IN-USE → FIELDS
- delete: IN-USE
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rollctl.domain.catalogs import (
    aggregate_catalogs,
    can_modify_catalog,
    check_catalog_code_unique,
    check_catalog_create,
    check_catalog_delete,
    check_catalog_update,
    suggest_catalog_code,
)
from rollctl.domain.limits import DEFAULT_CATALOG_LIMITS, CatalogLimits
from rollctl.services.base import BaseService
from rollctl.services.result import ServiceResult
from rollctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from rollctl.domain.models import Catalog, CreateCatalogDTO, Roll, UpdateCatalogDTO


def count_rolls(catalog_id: str, rolls: Iterable[Roll]) -> int:
    """Number of rolls grouped under *catalog_id*."""
    return sum(1 for roll in rolls if roll.catalog_id == catalog_id)


class CatalogRulesService(BaseService):
    """Validates catalog mutations and reports catalog statistics."""

    def __init__(self, limits: CatalogLimits = DEFAULT_CATALOG_LIMITS) -> None:
        super().__init__()
        self._limits = limits

    @traced
    def validate_create(self, dto: CreateCatalogDTO, catalogs: Sequence[Catalog]) -> ServiceResult:
        op = "catalog_check_create"

        with trace_span("fields"):
            fields = check_catalog_create(dto, self._limits)
        if not fields.ok:
            return self._reject(op, fields, code=dto.code)

        with trace_span("code"):
            unique = check_catalog_code_unique(dto.code, catalogs)
        if not unique.ok:
            return self._reject(op, unique, code=dto.code)

        return ServiceResult(ok=True, op=op, data={"code": dto.code, "name": dto.name})

    @traced
    def validate_update(
        self,
        current: Catalog,
        patch: UpdateCatalogDTO,
        rolls: Sequence[Roll],
    ) -> ServiceResult:
        op = "catalog_check_update"
        roll_count = count_rolls(current.id, rolls)

        result = check_catalog_update(current, patch, roll_count=roll_count, limits=self._limits)
        if not result.ok:
            return self._reject(op, result, id=current.id)

        warnings: list[str] = []
        if not can_modify_catalog(current):
            warnings.append(f"Catalog {current.id} is archived")
        return ServiceResult(
            ok=True,
            op=op,
            data={"id": current.id, "fields_changed": patch.present_fields()},
            warnings=warnings,
        )

    @traced
    def validate_delete(self, catalog: Catalog, rolls: Sequence[Roll]) -> ServiceResult:
        op = "catalog_check_delete"
        roll_count = count_rolls(catalog.id, rolls)
        result = check_catalog_delete(catalog, roll_count)
        if not result.ok:
            return self._reject(op, result, id=catalog.id)
        return ServiceResult(ok=True, op=op, data={"id": catalog.id, "code": catalog.code})

    def suggest_code(self, name: str) -> ServiceResult:
        return ServiceResult(
            ok=True,
            op="catalog_suggest_code",
            data={"name": name, "code": suggest_catalog_code(name, self._limits)},
        )

    @traced
    def stats(self, catalogs: Sequence[Catalog]) -> ServiceResult:
        summary = aggregate_catalogs(catalogs)
        return ServiceResult(ok=True, op="catalog_stats", data=summary.model_dump(mode="json"))
