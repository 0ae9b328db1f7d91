"""Order lifecycle state machine.

    PENDING   → CHALLENGE | LUNAS | GAGAL
    CHALLENGE → LUNAS | GAGAL
    LUNAS     → MINTED | LUNAS_MINT_FAILED      (ticket issuance only)

GAGAL, CANCEL, MINTED and LUNAS_MINT_FAILED are terminal. Transitions only
move forward; a status update is applied with
``WHERE status IN sources_for(target)`` so concurrent writers cannot both win.
"""
from src.bk_common.enums import OrderStatus

_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset(
        {OrderStatus.CHALLENGE, OrderStatus.LUNAS, OrderStatus.GAGAL}
    ),
    OrderStatus.CHALLENGE: frozenset({OrderStatus.LUNAS, OrderStatus.GAGAL}),
    OrderStatus.LUNAS: frozenset({OrderStatus.MINTED, OrderStatus.LUNAS_MINT_FAILED}),
}

# Statuses the settlement reconciler is allowed to move out of.
RECONCILABLE_STATUSES: frozenset[OrderStatus] = frozenset(
    {OrderStatus.PENDING, OrderStatus.CHALLENGE}
)


def can_transition(current: str, target: str) -> bool:
    try:
        allowed = _TRANSITIONS.get(OrderStatus(current), frozenset())
        return OrderStatus(target) in allowed
    except ValueError:
        return False


def sources_for(target: str) -> tuple[OrderStatus, ...]:
    """All statuses from which ``target`` may be entered, in declaration order."""
    return tuple(
        source for source, targets in _TRANSITIONS.items() if OrderStatus(target) in targets
    )


def is_terminal(status: str) -> bool:
    return OrderStatus(status) not in _TRANSITIONS
