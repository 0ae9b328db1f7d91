"""SettlementReconciler — one reconciliation, two triggers.

Push: the gateway calls the notification webhook. The payload is untrusted;
only its order id is used, and only when it names one of our orders, to
re-query the gateway for the real status.
Pull: a client asks for a manual status check of one order.

Both end in reconcile(), which applies the mapped status with a single
conditional UPDATE. Whoever's UPDATE returns the row won the transition; only
that caller runs ticket issuance, so issuance happens at most once per order
however many notifications and checks arrive.
"""
import asyncio
import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.bk_common.enums import OrderStatus
from src.bk_common.errors import AppError, GatewayTimeoutError, OrderNotFoundError
from src.bk_issuance.application.pipeline import TicketIssuancePipeline
from src.bk_order.domain.repository import OrderRepositoryProtocol
from src.bk_order.domain.state_machine import (
    RECONCILABLE_STATUSES,
    can_transition,
    sources_for,
)
from src.bk_order.infrastructure.persistence import OrderRepository
from src.bk_payment.application.service import get_payment_gateway
from src.bk_payment.domain.gateway import PaymentGatewayProtocol
from src.bk_payment.domain.models import GatewayStatus
from src.bk_settlement.application.schemas import CheckStatusResponse
from src.bk_settlement.domain.mapping import map_gateway_status
from src.bk_settlement.domain.models import ReconcileResult

logger = logging.getLogger(__name__)


class SettlementReconciler:
    def __init__(
        self,
        orders: OrderRepositoryProtocol | None = None,
        pipeline: TicketIssuancePipeline | None = None,
        gateway: PaymentGatewayProtocol | None = None,
        query_timeout_seconds: float | None = None,
    ) -> None:
        self._orders: OrderRepositoryProtocol = orders or OrderRepository()
        self._pipeline = pipeline or TicketIssuancePipeline(orders=self._orders)
        self._gateway = gateway
        self._query_timeout = (
            settings.GATEWAY_TIMEOUT_SECONDS
            if query_timeout_seconds is None
            else query_timeout_seconds
        )

    @property
    def gateway(self) -> PaymentGatewayProtocol:
        return self._gateway or get_payment_gateway()

    async def reconcile(
        self, db: AsyncSession, order_ref: str, status: GatewayStatus
    ) -> ReconcileResult:
        order = await self._orders.get_by_ref(db, order_ref)
        if order is None:
            raise OrderNotFoundError(order_ref)

        target = map_gateway_status(status.transaction_status, status.fraud_status)
        if (
            target is None
            or target == order.status
            or OrderStatus(order.status) not in RECONCILABLE_STATUSES
            or not can_transition(order.status, target)
        ):
            logger.info(
                "Order %s unchanged: status %s, gateway %s/%s",
                order_ref,
                order.status,
                status.transaction_status,
                status.fraud_status,
            )
            return ReconcileResult(order_status=order.status, updated=False)

        try:
            moved = await self._orders.transition_status(
                db, order_ref, sources_for(target), target.value
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        if moved is None:
            current = await self._orders.get_by_ref(db, order_ref)
            current_status = current.status if current is not None else order.status
            logger.info(
                "Order %s already moved to %s by a concurrent update", order_ref, current_status
            )
            return ReconcileResult(order_status=current_status, updated=False)

        logger.info("Order %s: %s -> %s", order_ref, order.status, target.value)
        if target != OrderStatus.LUNAS:
            return ReconcileResult(order_status=target.value, updated=True)

        outcome = await self._pipeline.issue(db, moved)
        return ReconcileResult(
            order_status=outcome.status,
            updated=True,
            minting_error=outcome.minting_error,
        )

    async def handle_gateway_notification(
        self, db: AsyncSession, payload: Any
    ) -> ReconcileResult | None:
        """Process one webhook delivery. Never raises; returns None when nothing was applied."""
        try:
            if not isinstance(payload, dict):
                logger.warning("Ignoring gateway notification with non-object body")
                return None
            order_id = payload.get("order_id")
            if not order_id and not payload.get("transaction_status"):
                logger.info("Ignoring gateway notification without order id and status")
                return None
            if not order_id:
                logger.warning(
                    "Ignoring gateway notification without order id (status %s)",
                    payload.get("transaction_status"),
                )
                return None

            order_ref = str(order_id)
            if await self._orders.get_by_ref(db, order_ref) is None:
                logger.warning("Ignoring gateway notification for unknown order %s", order_ref)
                return None
            status = await self._query_status(order_ref)
            logger.info(
                "Gateway notification for %s: %s/%s",
                order_ref,
                status.transaction_status,
                status.fraud_status,
            )
            return await self.reconcile(db, order_ref, status)
        except AppError as exc:
            logger.warning("Gateway notification not applied: %s", exc.message)
        except Exception:
            logger.exception("Gateway notification failed")
        return None

    async def check_status(self, db: AsyncSession, order_ref: str) -> CheckStatusResponse:
        order = await self._orders.get_by_ref(db, order_ref)
        if order is None:
            raise OrderNotFoundError(order_ref)

        status = await self._query_status(order_ref)
        logger.info(
            "Manual check for %s: %s/%s",
            order_ref,
            status.transaction_status,
            status.fraud_status,
        )
        result = await self.reconcile(db, order_ref, status)
        return CheckStatusResponse(
            order_id=order_ref,
            order_status=result.order_status,
            updated=result.updated,
            minting_error=result.minting_error,
        )

    async def _query_status(self, order_ref: str) -> GatewayStatus:
        try:
            return await asyncio.wait_for(
                self.gateway.query_status(order_ref), timeout=self._query_timeout
            )
        except asyncio.TimeoutError as exc:
            raise GatewayTimeoutError("query_status") from exc
