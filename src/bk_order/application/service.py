"""OrderApplicationService — purchase, order listing and ticket projections.

purchase() owns one transaction from route lookup to gateway session. Any
failure rolls it back as a whole: no order row, no promo unit consumed, the
seat stays free. Everything else here is read-only.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.bk_catalog.application.service import RouteCatalogService
from src.bk_common.datetime_utils import utc_now
from src.bk_common.errors import OrderNotFoundError, UserNotFoundError
from src.bk_common.id_generator import generate_id, generate_order_ref
from src.bk_fare.application.service import FareResolver
from src.bk_identity.domain.repository import IdentityRepositoryProtocol
from src.bk_identity.infrastructure.persistence import IdentityRepository
from src.bk_order.application.schemas import (
    OrderListResponse,
    OrderResponse,
    PurchaseRequest,
    PurchaseResponse,
    TicketMetadata,
    VerifiedTicket,
    VerifyTicketResponse,
)
from src.bk_order.domain.metadata import build_ticket_metadata
from src.bk_order.domain.models import MINT_FAILED_SENTINEL, Order
from src.bk_order.domain.repository import OrderRepositoryProtocol
from src.bk_order.infrastructure.persistence import OrderRepository
from src.bk_payment.application.service import get_payment_gateway
from src.bk_payment.domain.gateway import PaymentGatewayProtocol
from src.bk_payment.domain.models import GatewayCustomer

logger = logging.getLogger(__name__)

ORDER_LIST_LIMIT = 100


class OrderApplicationService:
    def __init__(
        self,
        repo: OrderRepositoryProtocol | None = None,
        catalog: RouteCatalogService | None = None,
        identities: IdentityRepositoryProtocol | None = None,
        fares: FareResolver | None = None,
        gateway: PaymentGatewayProtocol | None = None,
    ) -> None:
        self._repo: OrderRepositoryProtocol = repo or OrderRepository()
        self._catalog = catalog or RouteCatalogService()
        self._identities: IdentityRepositoryProtocol = identities or IdentityRepository()
        self._fares = fares or FareResolver()
        self._gateway = gateway

    @property
    def gateway(self) -> PaymentGatewayProtocol:
        return self._gateway or get_payment_gateway()

    async def purchase(self, db: AsyncSession, req: PurchaseRequest) -> PurchaseResponse:
        try:
            route = await self._catalog.get_route(db, req.route_id)
            user = await self._identities.find_by_email(db, req.email)
            if user is None:
                raise UserNotFoundError(req.email)

            quote = await self._fares.resolve_price(db, route.fare, req.promo_code)

            now = utc_now()
            snapshot = route.snapshot()
            order = Order(
                id=generate_id(),
                order_ref=generate_order_ref(settings.ORDER_REF_PREFIX),
                email=user.email,
                route_id=snapshot.route_id,
                route_label=snapshot.label,
                operator=snapshot.operator,
                departure_time=snapshot.departure_time,
                travel_date=req.travel_date,
                seat_number=req.seat_number,
                original_fare=quote.base_fare,
                discount=quote.discount_applied,
                total_amount=quote.final_price,
                passenger_name=req.passenger_name,
                passenger_id_number=req.passenger_id_number,
                pickup_point=req.pickup_point,
                dropoff_point=req.dropoff_point,
                vehicle_type=snapshot.vehicle_type,
                category=snapshot.category,
                created_at=now,
                updated_at=now,
            )
            await self._repo.insert(db, order)

            session = await self.gateway.create_session(
                order_ref=order.order_ref,
                amount=order.total_amount,
                item_description=f"{order.operator} Trip",
                customer=GatewayCustomer(name=req.passenger_name, email=user.email),
                item_id=str(route.id),
            )
            await self._repo.attach_session(
                db, order.order_ref, session.token, session.redirect_url
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Order %s created: seat %s on %s %s/%s, total %d",
            order.order_ref,
            order.seat_number,
            order.route_label,
            order.departure_time,
            order.travel_date,
            order.total_amount,
        )
        return PurchaseResponse(
            order_id=order.order_ref,
            token=session.token,
            redirect_url=session.redirect_url,
        )

    async def list_orders(self, db: AsyncSession, email: str) -> OrderListResponse:
        orders = await self._repo.list_by_email(db, email, ORDER_LIST_LIMIT)
        return OrderListResponse(orders=[OrderResponse.from_domain(o) for o in orders])

    async def get_order(self, db: AsyncSession, order_ref: str) -> Order:
        order = await self._repo.get_by_ref(db, order_ref)
        if order is None:
            raise OrderNotFoundError(order_ref)
        return order

    async def metadata_for(self, db: AsyncSession, order_ref: str) -> TicketMetadata:
        order = await self.get_order(db, order_ref)
        image_url = f"{settings.PUBLIC_BASE_URL.rstrip('/')}{settings.TICKET_IMAGE_PATH}"
        return TicketMetadata.model_validate(build_ticket_metadata(order, image_url))

    async def verify_ticket(self, db: AsyncSession, tx_hash: str) -> VerifyTicketResponse:
        if tx_hash == MINT_FAILED_SENTINEL:
            return VerifyTicketResponse(valid=False)
        order = await self._repo.get_by_tx_hash(db, tx_hash)
        if order is None or not order.has_valid_ticket_hash:
            logger.info("Ticket verification failed for hash %s", tx_hash)
            return VerifyTicketResponse(valid=False)
        logger.info("Ticket verified: %s (%s)", order.order_ref, tx_hash)
        return VerifyTicketResponse(
            valid=True,
            data=VerifiedTicket(
                passenger_name=order.passenger_name,
                route_label=order.route_label,
                travel_date=order.travel_date,
                departure_time=order.departure_time,
                seat_number=order.seat_number,
                status=order.status,
            ),
        )
