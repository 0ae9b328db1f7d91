"""In-memory collaborators for service-level tests.

The fakes keep the atomic guarantees the database gives the real
repositories: every check-and-write below runs without an ``await`` in
between, so under asyncio it is indivisible, just like the conditional SQL it
stands in for. Writes register an undo step on the FakeSession so rollback()
restores the previous state.
"""
import asyncio
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime, timezone

from src.bk_catalog.domain.models import Route
from src.bk_common.enums import OrderStatus
from src.bk_common.errors import GatewayError, SeatConflictError
from src.bk_fare.domain.models import Promo
from src.bk_identity.domain.models import Identity
from src.bk_order.domain.models import Order
from src.bk_payment.domain.models import GatewayCustomer, GatewaySession, GatewayStatus


class FakeSession:
    def __init__(self) -> None:
        self._undo: list[Callable[[], None]] = []
        self.commits = 0
        self.rollbacks = 0

    def on_rollback(self, undo: Callable[[], None]) -> None:
        self._undo.append(undo)

    async def commit(self) -> None:
        self._undo.clear()
        self.commits += 1

    async def rollback(self) -> None:
        while self._undo:
            self._undo.pop()()
        self.rollbacks += 1


class FakeRouteRepository:
    def __init__(self, *routes: Route) -> None:
        self.routes = {r.id: r for r in routes}

    async def get_by_id(self, db, route_id: int) -> Route | None:
        return self.routes.get(route_id)

    async def search(self, db, origin, destination, pickup_point, dropoff_point, limit):
        return list(self.routes.values())[:limit]


class FakeIdentityRepository:
    def __init__(self, *identities: Identity) -> None:
        self.identities = {i.email: i for i in identities}

    async def find_by_email(self, db, email: str) -> Identity | None:
        return self.identities.get(email)


class FakePromoRepository:
    def __init__(self, *promos: Promo) -> None:
        self.promos = {p.code: p for p in promos}
        self.consume_calls = 0

    async def find_redeemable(self, db, code: str) -> Promo | None:
        promo = self.promos.get(code)
        return replace(promo) if promo and promo.is_redeemable else None

    async def consume_one(self, db: FakeSession, code: str) -> Promo | None:
        self.consume_calls += 1
        promo = self.promos.get(code)
        if promo is None or not promo.is_redeemable:
            return None
        redeemed = replace(promo)
        promo.quota -= 1

        def undo() -> None:
            promo.quota += 1

        db.on_rollback(undo)
        return redeemed


class FakeOrderRepository:
    def __init__(self, *orders: Order) -> None:
        self.orders: dict[str, Order] = {o.order_ref: o for o in orders}
        self.transition_calls = 0

    def _set(self, db: FakeSession, order: Order) -> None:
        previous = self.orders.get(order.order_ref)
        self.orders[order.order_ref] = order

        def undo() -> None:
            if previous is None:
                self.orders.pop(order.order_ref, None)
            else:
                self.orders[order.order_ref] = previous

        db.on_rollback(undo)

    async def insert(self, db: FakeSession, order: Order) -> None:
        for existing in self.orders.values():
            if existing.holds_seat and existing.seat_key == order.seat_key:
                raise SeatConflictError(order.seat_number)
        self._set(db, replace(order))

    async def attach_session(self, db, order_ref: str, snap_token: str, redirect_url: str) -> None:
        order = self.orders[order_ref]
        self._set(db, replace(order, snap_token=snap_token, redirect_url=redirect_url))

    async def get_by_ref(self, db, order_ref: str) -> Order | None:
        order = self.orders.get(order_ref)
        return replace(order) if order else None

    async def get_by_tx_hash(self, db, tx_hash: str) -> Order | None:
        for order in self.orders.values():
            if order.tx_hash == tx_hash:
                return replace(order)
        return None

    async def transition_status(
        self, db, order_ref: str, sources: Iterable[str], target: str
    ) -> Order | None:
        self.transition_calls += 1
        order = self.orders.get(order_ref)
        if order is None or order.status not in {OrderStatus(s).value for s in sources}:
            return None
        moved = replace(order, status=OrderStatus(target).value)
        self._set(db, moved)
        return replace(moved)

    async def record_issuance(self, db, order_ref: str, status: str, tx_hash: str) -> Order | None:
        order = self.orders.get(order_ref)
        if order is None or order.status != OrderStatus.LUNAS.value or order.tx_hash is not None:
            return None
        recorded = replace(order, status=OrderStatus(status).value, tx_hash=tx_hash)
        self._set(db, recorded)
        return replace(recorded)

    async def list_by_email(self, db, email: str, limit: int) -> list[Order]:
        matches = [o for o in self.orders.values() if o.email == email]
        return sorted(matches, key=lambda o: o.created_at, reverse=True)[:limit]

    async def list_recent(self, db, limit: int) -> list[Order]:
        return sorted(self.orders.values(), key=lambda o: o.created_at, reverse=True)[:limit]


class FakeGateway:
    def __init__(
        self,
        statuses: dict[str, GatewayStatus] | None = None,
        fail_create: Exception | None = None,
        query_delay: float = 0.0,
        query_error: Exception | None = None,
    ) -> None:
        self.statuses = statuses or {}
        self.fail_create = fail_create
        self.query_delay = query_delay
        self.query_error = query_error
        self.sessions: list[tuple[str, int, GatewayCustomer]] = []
        self.queries: list[str] = []

    async def create_session(
        self,
        order_ref: str,
        amount: int,
        item_description: str,
        customer: GatewayCustomer,
        item_id: str | None = None,
    ) -> GatewaySession:
        await asyncio.sleep(0)
        if self.fail_create is not None:
            raise self.fail_create
        self.sessions.append((order_ref, amount, customer))
        return GatewaySession(token=f"tok-{order_ref}", redirect_url=f"https://pay.test/{order_ref}")

    async def query_status(self, order_ref: str) -> GatewayStatus:
        self.queries.append(order_ref)
        await asyncio.sleep(self.query_delay)
        if self.query_error is not None:
            raise self.query_error
        status = self.statuses.get(order_ref)
        if status is None:
            raise GatewayError(f"unknown transaction {order_ref}")
        return status


class FakeMinter:
    def __init__(self, tx_hash: str = "0xfeedbeef", error: Exception | None = None) -> None:
        self.tx_hash = tx_hash
        self.error = error
        self.calls: list[tuple[list[str], str]] = []

    async def mint(self, recipients: list[str], token_uri: str) -> str:
        self.calls.append((recipients, token_uri))
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.tx_hash


class FakeNotifier:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.sent: list[tuple[str, str, str]] = []

    async def send(self, to: str, subject: str, html: str) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append((to, subject, html))


def make_route(**kwargs) -> Route:
    return Route(
        id=kwargs.get("id", 1),
        origin=kwargs.get("origin", "Medan"),
        destination=kwargs.get("destination", "Parapat"),
        operator=kwargs.get("operator", "OperatorX"),
        departure_time=kwargs.get("departure_time", "08:00"),
        fare=kwargs.get("fare", 150000),
        capacity=kwargs.get("capacity", 10),
        vehicle_type=kwargs.get("vehicle_type", "Bus"),
        category=kwargs.get("category", "Executive"),
    )


def make_order(**kwargs) -> Order:
    return Order(
        id=kwargs.get("id", "1001"),
        order_ref=kwargs.get("order_ref", "TIKET-1748736000000-000001"),
        email=kwargs.get("email", "rina@example.com"),
        route_id=kwargs.get("route_id", 1),
        route_label=kwargs.get("route_label", "Medan - Parapat"),
        operator=kwargs.get("operator", "OperatorX"),
        departure_time=kwargs.get("departure_time", "08:00"),
        travel_date=kwargs.get("travel_date", "2025-06-01"),
        seat_number=kwargs.get("seat_number", "12A"),
        original_fare=kwargs.get("original_fare", 150000),
        discount=kwargs.get("discount", 0),
        total_amount=kwargs.get("total_amount", 150000),
        passenger_name=kwargs.get("passenger_name", "Rina Siregar"),
        passenger_id_number=kwargs.get("passenger_id_number", "1271010101900001"),
        status=kwargs.get("status", "PENDING"),
        tx_hash=kwargs.get("tx_hash"),
        created_at=kwargs.get("created_at", datetime(2025, 5, 20, 9, 0, tzinfo=timezone.utc)),
        updated_at=kwargs.get("updated_at", datetime(2025, 5, 20, 9, 0, tzinfo=timezone.utc)),
    )
