"""PaymentGateway Protocol — the contract the booking core consumes."""
from typing import Protocol

from src.bk_payment.domain.models import GatewayCustomer, GatewaySession, GatewayStatus


class PaymentGatewayProtocol(Protocol):
    async def create_session(
        self,
        order_ref: str,
        amount: int,
        item_description: str,
        customer: GatewayCustomer,
        item_id: str | None = None,
    ) -> GatewaySession: ...

    async def query_status(self, order_ref: str) -> GatewayStatus: ...
