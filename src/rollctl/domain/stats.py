"""Aggregate counts over roll records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from rollctl.domain.types import RollStatus

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rollctl.domain.models import Roll


class RollStats(BaseModel):
    """Counts by status (all statuses present) and by catalog (sparse)."""

    model_config = {"frozen": True}

    total: int = 0
    by_status: dict[RollStatus, int] = Field(
        default_factory=lambda: dict.fromkeys(RollStatus, 0)
    )
    by_catalog: dict[str, int] = Field(default_factory=dict)


def aggregate(records: Iterable[Roll]) -> RollStats:
    """Count *records* by status and by catalog.

    ``by_catalog`` keys appear in first-seen order.
    """
    total = 0
    by_status = dict.fromkeys(RollStatus, 0)
    by_catalog: dict[str, int] = {}
    for roll in records:
        total += 1
        by_status[roll.status] += 1
        by_catalog[roll.catalog_id] = by_catalog.get(roll.catalog_id, 0) + 1
    return RollStats(total=total, by_status=by_status, by_catalog=by_catalog)
