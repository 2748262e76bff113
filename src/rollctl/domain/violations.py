"""Rule violations — the tagged union every guard reports through.

Each violation is a frozen pydantic model whose ``kind`` field is the
discriminator.  Callers branch on ``violation.kind`` (or use
``match``/``case`` on the model class) and read the structured payload
fields directly; ``message`` is a rendering convenience only.

Guards return a :class:`GuardResult` rather than raising.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from rollctl.domain.types import RollStatus


class ViolationKind(StrEnum):
    """Discriminator values for :data:`Violation`."""

    INVALID_TRANSITION = "INVALID_TRANSITION"
    INVALID_LENGTH = "INVALID_LENGTH"
    LENGTH_TOO_LARGE = "LENGTH_TOO_LARGE"
    INVALID_BARCODE = "INVALID_BARCODE"
    INVALID_FIELD = "INVALID_FIELD"
    LOCKED_RECORD = "LOCKED_RECORD"
    BARCODE_CONFLICT = "BARCODE_CONFLICT"
    INVALID_CATALOG_CODE = "INVALID_CATALOG_CODE"
    IMMUTABLE_FIELD = "IMMUTABLE_FIELD"
    CATALOG_CODE_CONFLICT = "CATALOG_CODE_CONFLICT"
    CATALOG_IN_USE = "CATALOG_IN_USE"


class _ViolationBase(BaseModel):
    model_config = {"frozen": True}

    @property
    @abstractmethod
    def message(self) -> str:
        """Human-readable rendering of the payload."""

    def detail(self) -> dict[str, object]:
        """Structured payload without the discriminator."""
        return self.model_dump(mode="json", exclude={"kind"})


# --- Roll violations ---


class InvalidTransition(_ViolationBase):
    kind: Literal[ViolationKind.INVALID_TRANSITION] = ViolationKind.INVALID_TRANSITION
    from_status: RollStatus
    to_status: RollStatus
    allowed: tuple[RollStatus, ...]

    @property
    def message(self) -> str:
        allowed = ", ".join(self.allowed) or "none (final state)"
        return (
            f'Invalid status transition from "{self.from_status}" to "{self.to_status}". '
            f'Allowed transitions from "{self.from_status}": {allowed}'
        )


class InvalidLength(_ViolationBase):
    kind: Literal[ViolationKind.INVALID_LENGTH] = ViolationKind.INVALID_LENGTH
    provided: float

    @property
    def message(self) -> str:
        return "Roll length must be greater than 0"


class LengthTooLarge(_ViolationBase):
    kind: Literal[ViolationKind.LENGTH_TOO_LARGE] = ViolationKind.LENGTH_TOO_LARGE
    limit: float
    provided: float

    @property
    def message(self) -> str:
        return f"Roll length cannot exceed {self.limit:g} meters (got {self.provided:g})"


class InvalidBarcode(_ViolationBase):
    kind: Literal[ViolationKind.INVALID_BARCODE] = ViolationKind.INVALID_BARCODE
    barcode: str
    min_length: int
    max_length: int

    @property
    def message(self) -> str:
        return f"Barcode must be between {self.min_length} and {self.max_length} characters long"


class InvalidField(_ViolationBase):
    kind: Literal[ViolationKind.INVALID_FIELD] = ViolationKind.INVALID_FIELD
    field: str
    reason: str

    @property
    def message(self) -> str:
        return f"Invalid {self.field}: {self.reason}"


class LockedRecord(_ViolationBase):
    kind: Literal[ViolationKind.LOCKED_RECORD] = ViolationKind.LOCKED_RECORD
    invalid_fields: tuple[str, ...]
    allowed_fields: tuple[str, ...]

    @property
    def message(self) -> str:
        return (
            f"Cannot modify sold rolls except for {', '.join(self.allowed_fields)} "
            f"(rejected: {', '.join(self.invalid_fields)})"
        )


class BarcodeConflict(_ViolationBase):
    kind: Literal[ViolationKind.BARCODE_CONFLICT] = ViolationKind.BARCODE_CONFLICT
    barcode: str
    holder_id: str
    holder_status: RollStatus

    @property
    def message(self) -> str:
        return (
            f'Barcode "{self.barcode}" is already in use on an active roll '
            f"(ID: {self.holder_id}, Status: {self.holder_status})"
        )


# --- Catalog violations ---


class InvalidCatalogCode(_ViolationBase):
    kind: Literal[ViolationKind.INVALID_CATALOG_CODE] = ViolationKind.INVALID_CATALOG_CODE
    code: str
    reason: str

    @property
    def message(self) -> str:
        return f'Invalid catalog code "{self.code}": {self.reason}'


class ImmutableField(_ViolationBase):
    kind: Literal[ViolationKind.IMMUTABLE_FIELD] = ViolationKind.IMMUTABLE_FIELD
    field: str

    @property
    def message(self) -> str:
        return f"Catalog {self.field} cannot be changed after creation"


class CatalogCodeConflict(_ViolationBase):
    kind: Literal[ViolationKind.CATALOG_CODE_CONFLICT] = ViolationKind.CATALOG_CODE_CONFLICT
    code: str
    holder_id: str
    holder_name: str

    @property
    def message(self) -> str:
        return (
            f'Catalog code "{self.code}" is already in use by catalog '
            f'"{self.holder_name}" (ID: {self.holder_id})'
        )


class CatalogInUse(_ViolationBase):
    kind: Literal[ViolationKind.CATALOG_IN_USE] = ViolationKind.CATALOG_IN_USE
    catalog_id: str
    roll_count: int
    reason: Literal["archive", "delete"]

    @property
    def message(self) -> str:
        return (
            f"Cannot {self.reason} catalog {self.catalog_id}: "
            f"{self.roll_count} roll(s) still reference it"
        )


Violation = Annotated[
    InvalidTransition
    | InvalidLength
    | LengthTooLarge
    | InvalidBarcode
    | InvalidField
    | LockedRecord
    | BarcodeConflict
    | InvalidCatalogCode
    | ImmutableField
    | CatalogCodeConflict
    | CatalogInUse,
    Field(discriminator="kind"),
]


@dataclass(frozen=True)
class GuardResult:
    """Outcome of a guard: either ok, or exactly one violation."""

    violation: Violation | None = None

    @property
    def ok(self) -> bool:
        return self.violation is None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def fail(cls, violation: Violation) -> GuardResult:
        return cls(violation=violation)


PASS = GuardResult()
