# src/bk_order/infrastructure/persistence.py
"""OrderRepository — raw SQL persistence implementation.

Every status mutation is a conditional UPDATE ... RETURNING. A result of
0 rows means another writer already moved the order; callers treat that as
"lost the race", never as an error.

Transaction ownership: the CALLER (application service) commits or rolls back.
"""
from collections.abc import Iterable
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_common.enums import OrderStatus
from src.bk_common.errors import InternalError, SeatConflictError
from src.bk_order.domain.models import Order

# Partial unique index guarding one active order per seat key (migration 005).
ACTIVE_SEAT_CONSTRAINT = "uq_orders_active_seat"

# ---------------------------------------------------------------------------
# SQL statements
# ---------------------------------------------------------------------------

_SELECT_COLUMNS = """
    id, order_ref, email, route_id, route_label, operator, departure_time,
    travel_date, seat_number, original_fare, discount, total_amount,
    passenger_name, passenger_id_number, pickup_point, dropoff_point,
    vehicle_type, category, status, snap_token, redirect_url, tx_hash,
    created_at, updated_at
"""

_INSERT_ORDER_SQL = text("""
    INSERT INTO orders (id, order_ref, email, route_id, route_label, operator,
        departure_time, travel_date, seat_number,
        original_fare, discount, total_amount,
        passenger_name, passenger_id_number, pickup_point, dropoff_point,
        vehicle_type, category, status)
    VALUES (:id, :order_ref, :email, :route_id, :route_label, :operator,
        :departure_time, :travel_date, :seat_number,
        :original_fare, :discount, :total_amount,
        :passenger_name, :passenger_id_number, :pickup_point, :dropoff_point,
        :vehicle_type, :category, :status)
""")

_ATTACH_SESSION_SQL = text("""
    UPDATE orders
    SET snap_token = :snap_token, redirect_url = :redirect_url, updated_at = NOW()
    WHERE order_ref = :order_ref
    RETURNING order_ref
""")

_GET_BY_REF_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM orders WHERE order_ref = :order_ref
""")

_GET_BY_TX_HASH_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM orders WHERE tx_hash = :tx_hash
""")

_TRANSITION_STATUS_SQL = text(f"""
    UPDATE orders
    SET status = :target, updated_at = NOW()
    WHERE order_ref = :order_ref
      AND status = ANY(string_to_array(CAST(:sources_csv AS TEXT), ','))
    RETURNING {_SELECT_COLUMNS}
""")

_RECORD_ISSUANCE_SQL = text(f"""
    UPDATE orders
    SET status = :status, tx_hash = :tx_hash, updated_at = NOW()
    WHERE order_ref = :order_ref
      AND status = '{OrderStatus.LUNAS.value}'
      AND tx_hash IS NULL
    RETURNING {_SELECT_COLUMNS}
""")

_LIST_BY_EMAIL_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM orders
    WHERE email = :email
    ORDER BY created_at DESC, id DESC
    LIMIT :limit
""")

_LIST_RECENT_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM orders
    ORDER BY created_at DESC, id DESC
    LIMIT :limit
""")


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_order(row: Any) -> Order:
    """Convert a DB result row to an Order domain object."""
    return Order(
        id=row.id,
        order_ref=row.order_ref,
        email=row.email,
        route_id=row.route_id,
        route_label=row.route_label,
        operator=row.operator,
        departure_time=row.departure_time,
        travel_date=row.travel_date,
        seat_number=row.seat_number,
        original_fare=row.original_fare,
        discount=row.discount,
        total_amount=row.total_amount,
        passenger_name=row.passenger_name,
        passenger_id_number=row.passenger_id_number,
        pickup_point=row.pickup_point,
        dropoff_point=row.dropoff_point,
        vehicle_type=row.vehicle_type,
        category=row.category,
        status=row.status,
        snap_token=row.snap_token,
        redirect_url=row.redirect_url,
        tx_hash=row.tx_hash,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _violates(exc: IntegrityError, constraint: str) -> bool:
    orig = getattr(exc, "orig", None)
    name = getattr(orig, "constraint_name", None)
    if name is None:
        # asyncpg wraps its exception; the DBAPI adapter keeps it in __cause__
        name = getattr(getattr(orig, "__cause__", None), "constraint_name", None)
    return name == constraint or constraint in str(exc)


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class OrderRepository:
    """Concrete implementation of OrderRepositoryProtocol using raw SQL."""

    async def insert(self, db: AsyncSession, order: Order) -> None:
        """Insert a new order; the seat is held the moment this succeeds.

        Raises SeatConflictError when another active order already holds the
        seat key. The session's transaction is unusable afterwards and must be
        rolled back by the caller.
        """
        try:
            await db.execute(
                _INSERT_ORDER_SQL,
                {
                    "id": order.id,
                    "order_ref": order.order_ref,
                    "email": order.email,
                    "route_id": order.route_id,
                    "route_label": order.route_label,
                    "operator": order.operator,
                    "departure_time": order.departure_time,
                    "travel_date": order.travel_date,
                    "seat_number": order.seat_number,
                    "original_fare": order.original_fare,
                    "discount": order.discount,
                    "total_amount": order.total_amount,
                    "passenger_name": order.passenger_name,
                    "passenger_id_number": order.passenger_id_number,
                    "pickup_point": order.pickup_point,
                    "dropoff_point": order.dropoff_point,
                    "vehicle_type": order.vehicle_type,
                    "category": order.category,
                    "status": order.status,
                },
            )
        except IntegrityError as exc:
            if _violates(exc, ACTIVE_SEAT_CONSTRAINT):
                raise SeatConflictError(order.seat_number) from exc
            raise

    async def attach_session(
        self, db: AsyncSession, order_ref: str, snap_token: str, redirect_url: str
    ) -> None:
        result = await db.execute(
            _ATTACH_SESSION_SQL,
            {"order_ref": order_ref, "snap_token": snap_token, "redirect_url": redirect_url},
        )
        if result.fetchone() is None:
            raise InternalError(f"Order {order_ref} not found while attaching payment session")

    async def get_by_ref(self, db: AsyncSession, order_ref: str) -> Order | None:
        result = await db.execute(_GET_BY_REF_SQL, {"order_ref": order_ref})
        row = result.fetchone()
        return _row_to_order(row) if row else None

    async def get_by_tx_hash(self, db: AsyncSession, tx_hash: str) -> Order | None:
        result = await db.execute(_GET_BY_TX_HASH_SQL, {"tx_hash": tx_hash})
        row = result.fetchone()
        return _row_to_order(row) if row else None

    async def transition_status(
        self,
        db: AsyncSession,
        order_ref: str,
        sources: Iterable[str],
        target: str,
    ) -> Order | None:
        """Move to ``target`` only if the stored status is still one of ``sources``."""
        sources_csv = ",".join(str(OrderStatus(s).value) for s in sources)
        result = await db.execute(
            _TRANSITION_STATUS_SQL,
            {
                "order_ref": order_ref,
                "sources_csv": sources_csv,
                "target": OrderStatus(target).value,
            },
        )
        row = result.fetchone()
        return _row_to_order(row) if row else None

    async def record_issuance(
        self, db: AsyncSession, order_ref: str, status: str, tx_hash: str
    ) -> Order | None:
        """Write the mint outcome once: only a LUNAS order without a hash matches."""
        result = await db.execute(
            _RECORD_ISSUANCE_SQL,
            {"order_ref": order_ref, "status": OrderStatus(status).value, "tx_hash": tx_hash},
        )
        row = result.fetchone()
        return _row_to_order(row) if row else None

    async def list_by_email(self, db: AsyncSession, email: str, limit: int) -> list[Order]:
        result = await db.execute(_LIST_BY_EMAIL_SQL, {"email": email, "limit": limit})
        return [_row_to_order(row) for row in result.fetchall()]

    async def list_recent(self, db: AsyncSession, limit: int) -> list[Order]:
        result = await db.execute(_LIST_RECENT_SQL, {"limit": limit})
        return [_row_to_order(row) for row in result.fetchall()]
