# src/bk_seat/domain/repository.py
"""SeatLedgerRepository Protocol — read-side queries over persisted orders."""
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_seat.domain.models import SeatKey


class SeatLedgerRepositoryProtocol(Protocol):
    async def is_seat_held(self, db: AsyncSession, key: SeatKey) -> bool: ...

    async def list_held_seats(
        self,
        db: AsyncSession,
        route_label: str,
        travel_date: str,
        operator: str | None,
        departure_time: str | None,
    ) -> set[str]: ...
