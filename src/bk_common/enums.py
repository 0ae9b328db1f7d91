"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    CHALLENGE = "CHALLENGE"
    LUNAS = "LUNAS"  # paid
    GAGAL = "GAGAL"  # failed / expired / denied
    CANCEL = "CANCEL"
    MINTED = "MINTED"
    LUNAS_MINT_FAILED = "LUNAS_MINT_FAILED"


# Orders in these statuses no longer hold their seat.
SEAT_RELEASING_STATUSES: tuple[OrderStatus, ...] = (OrderStatus.CANCEL, OrderStatus.GAGAL)

# Statuses that count as money received.
PAID_STATUSES: tuple[OrderStatus, ...] = (
    OrderStatus.LUNAS,
    OrderStatus.MINTED,
    OrderStatus.LUNAS_MINT_FAILED,
)


class GatewayTransactionStatus(str, Enum):
    """transaction_status values reported by the payment gateway."""
    CAPTURE = "capture"
    SETTLEMENT = "settlement"
    PENDING = "pending"
    CANCEL = "cancel"
    DENY = "deny"
    EXPIRE = "expire"


class FraudStatus(str, Enum):
    ACCEPT = "accept"
    CHALLENGE = "challenge"
    DENY = "deny"

