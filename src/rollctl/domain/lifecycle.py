"""Roll status lifecycle.

    in_stock  -> reserved, sold
    reserved  -> in_stock (cancel reservation), sold
    sold      -> (terminal)

The table is the single source of truth; terminality and the allowed
successor sets are derived from it.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from rollctl.domain.types import RollStatus
from rollctl.domain.violations import PASS, GuardResult, InvalidTransition

if TYPE_CHECKING:
    from collections.abc import Mapping

ROLL_TRANSITIONS: Mapping[RollStatus, tuple[RollStatus, ...]] = MappingProxyType(
    {
        RollStatus.IN_STOCK: (RollStatus.RESERVED, RollStatus.SOLD),
        RollStatus.RESERVED: (RollStatus.IN_STOCK, RollStatus.SOLD),
        RollStatus.SOLD: (),
    }
)


def allowed_next(status: RollStatus) -> tuple[RollStatus, ...]:
    """Statuses reachable from *status* in one step."""
    return ROLL_TRANSITIONS[RollStatus(status)]


def is_terminal(status: RollStatus) -> bool:
    """Whether *status* has no outgoing transitions."""
    return not allowed_next(status)


def is_valid_transition(current: RollStatus, target: RollStatus) -> bool:
    """Check if moving from *current* to *target* is allowed.

    Staying in the same status is always allowed.
    """
    return current == target or RollStatus(target) in allowed_next(current)


def check_transition(current: RollStatus, target: RollStatus) -> GuardResult:
    """Guard a status change, reporting the full allowed set on failure."""
    if is_valid_transition(current, target):
        return PASS
    return GuardResult.fail(
        InvalidTransition(
            from_status=current,
            to_status=target,
            allowed=allowed_next(current),
        )
    )
