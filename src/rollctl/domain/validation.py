"""Field-level guards for roll create, update, and delete.

Checks run in a fixed order and the first failure is reported.  The one
exception is the sold-roll lock, which lists *every* rejected field so
the caller can show the whole edit surface in one round-trip.
"""

from __future__ import annotations

import math

from rollctl.domain.lifecycle import check_transition
from rollctl.domain.limits import DEFAULT_ROLL_LIMITS, RollLimits
from rollctl.domain.models import CreateRollDTO, Roll, UpdateRollDTO
from rollctl.domain.types import RollStatus
from rollctl.domain.violations import (
    PASS,
    GuardResult,
    InvalidBarcode,
    InvalidField,
    InvalidLength,
    LengthTooLarge,
    LockedRecord,
)

# Fields a sold roll still accepts.
SOLD_ROLL_EDITABLE_FIELDS: tuple[str, ...] = ("location",)

# Patch fields that may be explicitly cleared with null.
_NULLABLE_PATCH_FIELDS = frozenset({"location"})


# ---------------------------------------------------------------------------
# Single-field checks (shared by create and update)
# ---------------------------------------------------------------------------


def check_length(length_meters: float, limits: RollLimits = DEFAULT_ROLL_LIMITS) -> GuardResult:
    """Length must lie in ``(0, max_length_meters]``.

    NaN fails as ``InvalidLength``; it compares false against both bounds.
    """
    if math.isnan(length_meters) or length_meters <= 0:
        return GuardResult.fail(InvalidLength(provided=length_meters))
    if length_meters > limits.max_length_meters:
        return GuardResult.fail(
            LengthTooLarge(limit=limits.max_length_meters, provided=length_meters)
        )
    return PASS


def check_barcode(barcode: str, limits: RollLimits = DEFAULT_ROLL_LIMITS) -> GuardResult:
    """Barcode length, after trimming, must fall within the configured bounds."""
    size = len(barcode.strip())
    if size < limits.min_barcode_length or size > limits.max_barcode_length:
        return GuardResult.fail(
            InvalidBarcode(
                barcode=barcode,
                min_length=limits.min_barcode_length,
                max_length=limits.max_barcode_length,
            )
        )
    return PASS


def _check_optional_fields(
    *,
    limits: RollLimits,
    catalog_id: str | None = None,
    color: str | None = None,
    location: str | None = None,
) -> GuardResult:
    if catalog_id is not None and not catalog_id.strip():
        return GuardResult.fail(InvalidField(field="catalog_id", reason="catalog is required"))
    if color is not None:
        if not color.strip():
            return GuardResult.fail(InvalidField(field="color", reason="color cannot be empty"))
        if len(color) > limits.max_color_length:
            return GuardResult.fail(
                InvalidField(
                    field="color",
                    reason=f"must be {limits.max_color_length} characters or less",
                )
            )
    if location is not None and len(location) > limits.max_location_length:
        return GuardResult.fail(
            InvalidField(
                field="location",
                reason=f"must be {limits.max_location_length} characters or less",
            )
        )
    return PASS


# ---------------------------------------------------------------------------
# Public guards
# ---------------------------------------------------------------------------


def check_create(dto: CreateRollDTO, limits: RollLimits = DEFAULT_ROLL_LIMITS) -> GuardResult:
    """Validate a create payload: length, then barcode, then the remaining fields."""
    for result in (
        check_length(dto.length_meters, limits),
        check_barcode(dto.barcode, limits),
    ):
        if not result.ok:
            return result
    return _check_optional_fields(
        limits=limits,
        catalog_id=dto.catalog_id,
        color=dto.color,
        location=dto.location,
    )


def check_update(
    current: Roll,
    patch: UpdateRollDTO,
    limits: RollLimits = DEFAULT_ROLL_LIMITS,
) -> GuardResult:
    """Validate a patch against the roll it would modify.

    Order: status transition, length bounds, explicit nulls, field
    formats, then the sold-roll lock.  An empty patch is accepted.
    """
    present = patch.present_fields()
    if not present:
        return PASS

    if patch.status is not None and patch.status != current.status:
        result = check_transition(current.status, patch.status)
        if not result.ok:
            return result

    if patch.length_meters is not None:
        result = check_length(patch.length_meters, limits)
        if not result.ok:
            return result

    for name in present:
        if name not in _NULLABLE_PATCH_FIELDS and getattr(patch, name) is None:
            return GuardResult.fail(InvalidField(field=name, reason="cannot be null"))

    if patch.barcode is not None:
        result = check_barcode(patch.barcode, limits)
        if not result.ok:
            return result

    result = _check_optional_fields(
        limits=limits,
        catalog_id=patch.catalog_id,
        color=patch.color,
        location=patch.location,
    )
    if not result.ok:
        return result

    if current.status == RollStatus.SOLD:
        locked = [name for name in present if name not in SOLD_ROLL_EDITABLE_FIELDS]
        if locked:
            return GuardResult.fail(
                LockedRecord(
                    invalid_fields=tuple(locked),
                    allowed_fields=SOLD_ROLL_EDITABLE_FIELDS,
                )
            )

    return PASS


def check_delete(roll: Roll) -> GuardResult:
    """Deletion is currently unrestricted for every status (soft delete)."""
    return PASS
