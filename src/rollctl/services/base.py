"""BaseService — shared foundation for the rule services.

Services hold no mutable state beyond the limits they were built with,
so one instance can serve concurrent callers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from rollctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from rollctl.domain.violations import GuardResult


class BaseService:
    """Base for service classes that turn guard outcomes into ServiceResults."""

    def __init__(self) -> None:
        self._log = structlog.get_logger(type(self).__module__)

    def _reject(self, op: str, guard: GuardResult, **context: Any) -> ServiceResult:
        """Build a failed result from a failed guard and log the rejection."""
        violation = guard.violation
        if violation is None:
            msg = f"{op}: cannot reject a passing guard"
            raise ValueError(msg)
        self._log.info("rule.rejected", op=op, kind=str(violation.kind), **context)
        return ServiceResult(ok=False, op=op, error=ServiceError.from_violation(violation))
