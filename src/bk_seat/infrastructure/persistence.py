# src/bk_seat/infrastructure/persistence.py
"""SeatLedgerRepository — raw SQL reads over the orders table."""
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_common.enums import SEAT_RELEASING_STATUSES
from src.bk_seat.domain.models import SeatKey

_RELEASING = ", ".join(f"'{s.value}'" for s in SEAT_RELEASING_STATUSES)

_IS_SEAT_HELD_SQL = text(f"""
    SELECT EXISTS (
        SELECT 1 FROM orders
        WHERE route_label = :route_label
          AND operator = :operator
          AND departure_time = :departure_time
          AND travel_date = :travel_date
          AND seat_number = :seat_number
          AND status NOT IN ({_RELEASING})
    ) AS held
""")

_LIST_HELD_SEATS_SQL = text(f"""
    SELECT seat_number
    FROM orders
    WHERE route_label = :route_label
      AND travel_date = :travel_date
      AND (CAST(:operator AS TEXT) IS NULL OR operator = CAST(:operator AS TEXT))
      AND (CAST(:departure_time AS TEXT) IS NULL
           OR departure_time = CAST(:departure_time AS TEXT))
      AND status NOT IN ({_RELEASING})
""")


class SeatLedgerRepository:
    """Concrete implementation of SeatLedgerRepositoryProtocol using raw SQL."""

    async def is_seat_held(self, db: AsyncSession, key: SeatKey) -> bool:
        result = await db.execute(
            _IS_SEAT_HELD_SQL,
            {
                "route_label": key.route_label,
                "operator": key.operator,
                "departure_time": key.departure_time,
                "travel_date": key.travel_date,
                "seat_number": key.seat_number,
            },
        )
        return bool(result.scalar())

    async def list_held_seats(
        self,
        db: AsyncSession,
        route_label: str,
        travel_date: str,
        operator: str | None,
        departure_time: str | None,
    ) -> set[str]:
        result = await db.execute(
            _LIST_HELD_SEATS_SQL,
            {
                "route_label": route_label,
                "travel_date": travel_date,
                "operator": operator,
                "departure_time": departure_time,
            },
        )
        return {row.seat_number for row in result.fetchall()}
