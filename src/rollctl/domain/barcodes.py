"""Barcode reuse policy.

A barcode may be held by at most one *active* (non-sold) roll.  Sold
rolls release their claim, so a barcode can be re-attached once every
previous holder is sold.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rollctl.domain.violations import PASS, BarcodeConflict, GuardResult

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rollctl.domain.models import Roll


def active_holders(
    barcode: str,
    candidates: Iterable[Roll],
    exclude_id: str | None = None,
) -> list[Roll]:
    """Active rolls carrying *barcode*, skipping the roll being edited."""
    return [
        roll
        for roll in candidates
        if roll.barcode == barcode and roll.id != exclude_id and roll.is_active
    ]


def check_barcode_available(
    barcode: str,
    candidates: Iterable[Roll],
    exclude_id: str | None = None,
) -> GuardResult:
    """Reject *barcode* if an active roll other than *exclude_id* holds it.

    The first active holder found is reported.  More than one active holder
    means the stored data already violates the invariant; which one is
    named in that case is not significant.
    """
    holders = active_holders(barcode, candidates, exclude_id)
    if not holders:
        return PASS
    holder = holders[0]
    return GuardResult.fail(
        BarcodeConflict(barcode=barcode, holder_id=holder.id, holder_status=holder.status)
    )
