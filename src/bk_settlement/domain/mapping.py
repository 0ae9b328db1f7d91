"""Gateway transaction status → order status.

The only place gateway vocabulary is translated. Both the webhook path and
the manual status check go through map_gateway_status().
"""
from src.bk_common.enums import FraudStatus, GatewayTransactionStatus, OrderStatus

_FAILED = frozenset(
    {
        GatewayTransactionStatus.CANCEL.value,
        GatewayTransactionStatus.DENY.value,
        GatewayTransactionStatus.EXPIRE.value,
    }
)


def map_gateway_status(
    transaction_status: str | None, fraud_status: str | None = None
) -> OrderStatus | None:
    """Return the order status the gateway report implies, or None for no change.

    | transaction_status     | fraud_status | result    |
    |------------------------|--------------|-----------|
    | capture                | challenge    | CHALLENGE |
    | capture                | accept       | LUNAS     |
    | settlement             | any          | LUNAS     |
    | cancel / deny / expire | any          | GAGAL     |
    | pending                | any          | PENDING   |
    | anything else          |              | None      |
    """
    if transaction_status == GatewayTransactionStatus.CAPTURE.value:
        if fraud_status == FraudStatus.CHALLENGE.value:
            return OrderStatus.CHALLENGE
        if fraud_status == FraudStatus.ACCEPT.value:
            return OrderStatus.LUNAS
        return None
    if transaction_status == GatewayTransactionStatus.SETTLEMENT.value:
        return OrderStatus.LUNAS
    if transaction_status in _FAILED:
        return OrderStatus.GAGAL
    if transaction_status == GatewayTransactionStatus.PENDING.value:
        return OrderStatus.PENDING
    return None
