"""Payment gateway value objects."""
from dataclasses import dataclass


@dataclass(frozen=True)
class GatewayCustomer:
    name: str
    email: str
    phone: str | None = None


@dataclass(frozen=True)
class GatewaySession:
    token: str
    redirect_url: str


@dataclass(frozen=True)
class GatewayStatus:
    """Authoritative status of one transaction as reported by the gateway."""
    order_ref: str
    transaction_status: str | None
    fraud_status: str | None = None
