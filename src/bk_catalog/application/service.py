"""RouteCatalogService — route lookup for purchases and route search with seat counts.

All methods are read-only; no commit/rollback needed.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_catalog.application.schemas import RouteListing, RouteSearchResponse
from src.bk_catalog.domain.models import Route
from src.bk_catalog.domain.repository import RouteRepositoryProtocol
from src.bk_catalog.infrastructure.persistence import RouteRepository
from src.bk_common.errors import RouteNotFoundError
from src.bk_seat.application.service import SeatLedgerService

# Search callers send this date token when the user has not picked a date yet.
DEFAULT_TRAVEL_DATE = "DEFAULT"
_ANY_POINT = {"SEMUA", "ALL"}


def _point_filter(value: str | None) -> str | None:
    if value is None or value.upper() in _ANY_POINT:
        return None
    return value


class RouteCatalogService:
    def __init__(
        self,
        repo: RouteRepositoryProtocol | None = None,
        seats: SeatLedgerService | None = None,
    ) -> None:
        self._repo: RouteRepositoryProtocol = repo or RouteRepository()
        self._seats = seats or SeatLedgerService()

    async def get_route(self, db: AsyncSession, route_id: int) -> Route:
        route = await self._repo.get_by_id(db, route_id)
        if route is None:
            raise RouteNotFoundError(route_id)
        return route

    async def search_routes(
        self,
        db: AsyncSession,
        origin: str | None = None,
        destination: str | None = None,
        travel_date: str | None = None,
        pickup_point: str | None = None,
        dropoff_point: str | None = None,
        limit: int = 50,
    ) -> RouteSearchResponse:
        date_token = travel_date or DEFAULT_TRAVEL_DATE
        routes = await self._repo.search(
            db,
            origin or None,
            destination or None,
            _point_filter(pickup_point),
            _point_filter(dropoff_point),
            limit,
        )
        items = []
        for route in routes:
            seats = await self._seats.availability_for(
                db, route.label, route.operator, route.departure_time, date_token, route.capacity
            )
            items.append(RouteListing.from_domain(route, seats))
        return RouteSearchResponse(travel_date=date_token, items=items)
