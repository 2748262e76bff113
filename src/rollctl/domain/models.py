"""Record and payload models for rolls and catalogs.

Records (:class:`Roll`, :class:`Catalog`) are the caller's view of stored
state.  Payloads (``Create*DTO`` / ``Update*DTO``) are proposed changes.

Update payloads are sparse: which keys the caller sent is tracked by
pydantic's ``model_fields_set`` and exposed as :meth:`present_fields`, so
``{"location": None}`` (clear the location) is distinguishable from ``{}``
(touch nothing).

JSON keys may be given in snake_case or camelCase (``lengthMeters``).
Bounds are *not* enforced here; that is the guards' job, so a payload with
``length_meters=-1`` parses and is then rejected with a structured
violation.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from rollctl.domain.types import CatalogStatus, RollDegree, RollStatus

_RECORD_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)

_PATCH_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    extra="forbid",
)


class _Patch(BaseModel):
    model_config = _PATCH_CONFIG

    def present_fields(self) -> list[str]:
        """Field names the caller supplied, in declaration order."""
        return [name for name in type(self).model_fields if name in self.model_fields_set]


# --- Rolls ---


class Roll(BaseModel):
    """A roll of material as currently stored."""

    model_config = _RECORD_CONFIG

    id: str
    barcode: str
    status: RollStatus
    length_meters: float
    catalog_id: str
    location: str | None = None
    color: str | None = None
    degree: RollDegree | None = None

    @property
    def is_active(self) -> bool:
        return self.status != RollStatus.SOLD


class CreateRollDTO(BaseModel):
    """Payload for creating a roll."""

    model_config = _PATCH_CONFIG

    barcode: str
    length_meters: float
    catalog_id: str
    color: str | None = None
    degree: RollDegree | None = None
    location: str | None = None
    status: RollStatus | None = None


class UpdateRollDTO(_Patch):
    """Sparse patch over the mutable roll fields."""

    barcode: str | None = None
    catalog_id: str | None = None
    color: str | None = None
    degree: RollDegree | None = None
    length_meters: float | None = None
    location: str | None = None
    status: RollStatus | None = None


# --- Catalogs ---


class Catalog(BaseModel):
    """A catalog entry that rolls are grouped under."""

    model_config = _RECORD_CONFIG

    id: str
    code: str
    name: str
    material: str
    description: str = ""
    status: CatalogStatus = CatalogStatus.ACTIVE


class CreateCatalogDTO(BaseModel):
    """Payload for creating a catalog."""

    model_config = _PATCH_CONFIG

    code: str
    name: str
    material: str
    description: str = ""
    status: CatalogStatus | None = None


class UpdateCatalogDTO(_Patch):
    """Sparse patch over catalog fields.

    ``code`` is accepted only so that an attempt to change it can be
    reported as a violation instead of a parse error.
    """

    code: str | None = None
    name: str | None = None
    material: str | None = None
    description: str | None = None
    status: CatalogStatus | None = None
