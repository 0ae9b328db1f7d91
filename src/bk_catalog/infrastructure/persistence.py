# src/bk_catalog/infrastructure/persistence.py
"""RouteRepository — raw SQL persistence implementation (read-only)."""
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_catalog.domain.models import Route

_SELECT_COLUMNS = """
    id, origin, destination, operator, departure_time, fare, capacity,
    vehicle_type, category, pickup_point, dropoff_point
"""

_GET_ROUTE_BY_ID_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM routes WHERE id = :id
""")

_SEARCH_ROUTES_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM routes
    WHERE (CAST(:origin AS TEXT) IS NULL OR origin ILIKE '%' || CAST(:origin AS TEXT) || '%')
      AND (CAST(:destination AS TEXT) IS NULL OR destination ILIKE '%' || CAST(:destination AS TEXT) || '%')
      AND (CAST(:pickup_point AS TEXT) IS NULL OR pickup_point = :pickup_point)
      AND (CAST(:dropoff_point AS TEXT) IS NULL OR dropoff_point = :dropoff_point)
    ORDER BY departure_time, id
    LIMIT :limit
""")


def _row_to_route(row: Any) -> Route:
    return Route(
        id=row.id,
        origin=row.origin,
        destination=row.destination,
        operator=row.operator,
        departure_time=row.departure_time,
        fare=row.fare,
        capacity=row.capacity,
        vehicle_type=row.vehicle_type,
        category=row.category,
        pickup_point=row.pickup_point,
        dropoff_point=row.dropoff_point,
    )


class RouteRepository:
    """Concrete implementation of RouteRepositoryProtocol using raw SQL."""

    async def get_by_id(self, db: AsyncSession, route_id: int) -> Route | None:
        result = await db.execute(_GET_ROUTE_BY_ID_SQL, {"id": route_id})
        row = result.fetchone()
        return _row_to_route(row) if row else None

    async def search(
        self,
        db: AsyncSession,
        origin: str | None,
        destination: str | None,
        pickup_point: str | None,
        dropoff_point: str | None,
        limit: int,
    ) -> list[Route]:
        result = await db.execute(
            _SEARCH_ROUTES_SQL,
            {
                "origin": origin,
                "destination": destination,
                "pickup_point": pickup_point,
                "dropoff_point": dropoff_point,
                "limit": limit,
            },
        )
        return [_row_to_route(row) for row in result.fetchall()]
