"""SeatLedgerService — thin composition layer over the seat ledger repository.

All methods are read-only. Seat reservation itself happens in the order
store's conditional insert, never through a check here followed by a write.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_seat.application.schemas import HeldSeatsResponse
from src.bk_seat.domain.models import SeatAvailability, SeatKey, availability
from src.bk_seat.domain.repository import SeatLedgerRepositoryProtocol
from src.bk_seat.infrastructure.persistence import SeatLedgerRepository


class SeatLedgerService:
    def __init__(self, repo: SeatLedgerRepositoryProtocol | None = None) -> None:
        self._repo: SeatLedgerRepositoryProtocol = repo or SeatLedgerRepository()

    async def is_seat_held(self, db: AsyncSession, key: SeatKey) -> bool:
        return await self._repo.is_seat_held(db, key)

    async def list_held_seats(
        self,
        db: AsyncSession,
        route_label: str,
        travel_date: str,
        operator: str | None = None,
        departure_time: str | None = None,
    ) -> set[str]:
        return await self._repo.list_held_seats(
            db, route_label, travel_date, operator, departure_time
        )

    async def seat_map(
        self,
        db: AsyncSession,
        route_label: str,
        travel_date: str,
        operator: str | None = None,
        departure_time: str | None = None,
    ) -> HeldSeatsResponse:
        held = await self.list_held_seats(
            db, route_label, travel_date, operator, departure_time
        )
        return HeldSeatsResponse(
            route_label=route_label,
            travel_date=travel_date,
            booked_seats=sorted(held),
        )

    async def availability_for(
        self,
        db: AsyncSession,
        route_label: str,
        operator: str,
        departure_time: str,
        travel_date: str,
        capacity: int,
    ) -> SeatAvailability:
        held = await self.list_held_seats(
            db, route_label, travel_date, operator, departure_time
        )
        return availability(capacity, held)
