# src/bk_catalog/domain/repository.py
"""RouteRepository Protocol — interface contract for persistence layer."""
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_catalog.domain.models import Route


class RouteRepositoryProtocol(Protocol):
    async def get_by_id(self, db: AsyncSession, route_id: int) -> Route | None: ...

    async def search(
        self,
        db: AsyncSession,
        origin: str | None,
        destination: str | None,
        pickup_point: str | None,
        dropoff_point: str | None,
        limit: int,
    ) -> list[Route]: ...
