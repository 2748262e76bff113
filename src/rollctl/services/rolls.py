"""RollRulesService — the guard pipeline a caller runs before writing a roll.

Pipeline per operation (first failure wins, nothing is applied):

- create: FIELDS → BARCODE
- update: FIELDS (incl. status transition) → BARCODE (only if it changes)
- delete: always accepted

The caller supplies the current record set; this service performs no I/O.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rollctl.domain.barcodes import check_barcode_available
from rollctl.domain.limits import DEFAULT_ROLL_LIMITS, RollLimits
from rollctl.domain.lifecycle import allowed_next, is_terminal
from rollctl.domain.stats import aggregate
from rollctl.domain.types import RollStatus
from rollctl.domain.validation import check_create, check_delete, check_update
from rollctl.services.base import BaseService
from rollctl.services.result import ServiceResult
from rollctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rollctl.domain.models import CreateRollDTO, Roll, UpdateRollDTO


class RollRulesService(BaseService):
    """Validates roll mutations and reports roll statistics."""

    def __init__(self, limits: RollLimits = DEFAULT_ROLL_LIMITS) -> None:
        super().__init__()
        self._limits = limits

    @property
    def limits(self) -> RollLimits:
        return self._limits

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @traced
    def validate_create(self, dto: CreateRollDTO, records: Sequence[Roll]) -> ServiceResult:
        """Accept or reject a new roll against the current record set."""
        op = "check_create"

        with trace_span("fields"):
            fields = check_create(dto, self._limits)
        if not fields.ok:
            return self._reject(op, fields, barcode=dto.barcode)

        with trace_span("barcode") as span:
            barcode = check_barcode_available(dto.barcode, records)
            if span is not None:
                span.annotate("candidates", len(records))
        if not barcode.ok:
            return self._reject(op, barcode, barcode=dto.barcode)

        status = dto.status or RollStatus.IN_STOCK
        return ServiceResult(
            ok=True,
            op=op,
            data={"barcode": dto.barcode, "status": str(status)},
        )

    @traced
    def validate_update(
        self,
        current: Roll,
        patch: UpdateRollDTO,
        records: Sequence[Roll],
    ) -> ServiceResult:
        """Accept or reject a patch to *current*."""
        op = "check_update"
        fields_changed = patch.present_fields()

        with trace_span("fields"):
            fields = check_update(current, patch, self._limits)
        if not fields.ok:
            return self._reject(op, fields, id=current.id, fields=fields_changed)

        if patch.barcode is not None and patch.barcode != current.barcode:
            with trace_span("barcode"):
                barcode = check_barcode_available(patch.barcode, records, exclude_id=current.id)
            if not barcode.ok:
                return self._reject(op, barcode, id=current.id, barcode=patch.barcode)

        status = patch.status or current.status
        warnings: list[str] = []
        if not fields_changed:
            warnings.append("Empty patch: nothing to change")
        return ServiceResult(
            ok=True,
            op=op,
            data={"id": current.id, "fields_changed": fields_changed, "status": str(status)},
            warnings=warnings,
        )

    @traced
    def validate_delete(self, roll: Roll) -> ServiceResult:
        op = "check_delete"
        result = check_delete(roll)
        if not result.ok:
            return self._reject(op, result, id=roll.id)
        return ServiceResult(ok=True, op=op, data={"id": roll.id, "status": str(roll.status)})

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def transitions(self, status: RollStatus) -> ServiceResult:
        """Allowed next statuses, e.g. for populating a status picker."""
        return ServiceResult(
            ok=True,
            op="transitions",
            data={
                "status": str(status),
                "allowed": [str(s) for s in allowed_next(status)],
                "terminal": is_terminal(status),
            },
        )

    @traced
    def stats(self, records: Sequence[Roll]) -> ServiceResult:
        summary = aggregate(records)
        return ServiceResult(ok=True, op="stats", data=summary.model_dump(mode="json"))
