"""Catalog rules — code format and uniqueness, edit and delete restrictions.

Catalogs group rolls.  A catalog that rolls still reference can be
neither archived nor deleted, and its code is fixed once created.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from rollctl.domain.limits import DEFAULT_CATALOG_LIMITS, CatalogLimits
from rollctl.domain.types import CatalogStatus
from rollctl.domain.violations import (
    PASS,
    CatalogCodeConflict,
    CatalogInUse,
    GuardResult,
    ImmutableField,
    InvalidCatalogCode,
    InvalidField,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rollctl.domain.models import Catalog, CreateCatalogDTO, UpdateCatalogDTO

_CODE_PATTERN = re.compile(r"[A-Za-z0-9-]+")


def _check_text(
    field: str,
    value: str,
    *,
    min_length: int | None = None,
    max_length: int,
) -> GuardResult:
    if min_length is not None and len(value.strip()) < min_length:
        return GuardResult.fail(
            InvalidField(field=field, reason=f"must be at least {min_length} characters long")
        )
    if len(value) > max_length:
        return GuardResult.fail(
            InvalidField(field=field, reason=f"must be {max_length} characters or less")
        )
    return PASS


def _check_descriptive_fields(
    limits: CatalogLimits,
    *,
    name: str | None,
    material: str | None,
    description: str | None,
) -> GuardResult:
    checks: list[GuardResult] = []
    if name is not None:
        checks.append(
            _check_text(
                "name",
                name,
                min_length=limits.min_name_length,
                max_length=limits.max_name_length,
            )
        )
    if material is not None:
        checks.append(
            _check_text(
                "material",
                material,
                min_length=limits.min_material_length,
                max_length=limits.max_material_length,
            )
        )
    if description is not None:
        checks.append(
            _check_text("description", description, max_length=limits.max_description_length)
        )
    return next((c for c in checks if not c.ok), PASS)


def check_catalog_code(code: str, limits: CatalogLimits = DEFAULT_CATALOG_LIMITS) -> GuardResult:
    """Code must be 2-20 characters of letters, digits, and hyphens."""
    size = len(code.strip())
    if size < limits.min_code_length or size > limits.max_code_length:
        return GuardResult.fail(
            InvalidCatalogCode(
                code=code,
                reason=(
                    f"must be between {limits.min_code_length} and "
                    f"{limits.max_code_length} characters"
                ),
            )
        )
    if not _CODE_PATTERN.fullmatch(code):
        return GuardResult.fail(
            InvalidCatalogCode(code=code, reason="only letters, numbers, and hyphens are allowed")
        )
    return PASS


def check_catalog_create(
    dto: CreateCatalogDTO,
    limits: CatalogLimits = DEFAULT_CATALOG_LIMITS,
) -> GuardResult:
    result = check_catalog_code(dto.code, limits)
    if not result.ok:
        return result
    return _check_descriptive_fields(
        limits, name=dto.name, material=dto.material, description=dto.description
    )


def check_catalog_update(
    current: Catalog,
    patch: UpdateCatalogDTO,
    *,
    roll_count: int,
    limits: CatalogLimits = DEFAULT_CATALOG_LIMITS,
) -> GuardResult:
    """Validate a catalog patch.

    ``roll_count`` is the number of rolls referencing *current*; archiving
    is refused while it is non-zero.
    """
    present = patch.present_fields()
    if "code" in present:
        return GuardResult.fail(ImmutableField(field="code"))

    if patch.status == CatalogStatus.ARCHIVED and roll_count > 0:
        return GuardResult.fail(
            CatalogInUse(catalog_id=current.id, roll_count=roll_count, reason="archive")
        )

    for name in ("name", "material", "status"):
        if name in present and getattr(patch, name) is None:
            return GuardResult.fail(InvalidField(field=name, reason="cannot be null"))

    return _check_descriptive_fields(
        limits, name=patch.name, material=patch.material, description=patch.description
    )


def check_catalog_code_unique(
    code: str,
    catalogs: Iterable[Catalog],
    exclude_id: str | None = None,
) -> GuardResult:
    """Codes are unique case-insensitively across all catalogs."""
    wanted = code.lower()
    for catalog in catalogs:
        if catalog.code.lower() == wanted and catalog.id != exclude_id:
            return GuardResult.fail(
                CatalogCodeConflict(code=code, holder_id=catalog.id, holder_name=catalog.name)
            )
    return PASS


def check_catalog_delete(catalog: Catalog, roll_count: int) -> GuardResult:
    if roll_count > 0:
        return GuardResult.fail(
            CatalogInUse(catalog_id=catalog.id, roll_count=roll_count, reason="delete")
        )
    return PASS


def can_modify_catalog(catalog: Catalog) -> bool:
    """Archived catalogs are read-only."""
    return catalog.status != CatalogStatus.ARCHIVED


def suggest_catalog_code(name: str, limits: CatalogLimits = DEFAULT_CATALOG_LIMITS) -> str:
    """Derive a catalog code from a display name.

    ``"Premium Cotton 2024!"`` becomes ``"PREMIUM-COTTON-2024"``.
    """
    code = re.sub(r"[^A-Z0-9\s]", "", name.strip().upper())
    code = re.sub(r"\s+", "-", code)
    return code[: limits.max_code_length]


class CatalogStats(BaseModel):
    """Catalog counts by status (all statuses present)."""

    model_config = {"frozen": True}

    total: int = 0
    by_status: dict[CatalogStatus, int] = Field(
        default_factory=lambda: dict.fromkeys(CatalogStatus, 0)
    )


def aggregate_catalogs(catalogs: Iterable[Catalog]) -> CatalogStats:
    total = 0
    by_status = dict.fromkeys(CatalogStatus, 0)
    for catalog in catalogs:
        total += 1
        by_status[catalog.status] += 1
    return CatalogStats(total=total, by_status=by_status)
