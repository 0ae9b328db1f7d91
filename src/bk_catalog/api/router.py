"""bk_catalog REST endpoints.

GET /routes              — search routes with remaining-seat counts
GET /routes/{route_id}   — single route
"""

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_catalog.application.service import RouteCatalogService
from src.bk_common.database import get_db_session
from src.bk_common.response import ApiResponse, success_response

router = APIRouter(prefix="/routes", tags=["routes"])

_service = RouteCatalogService()


@router.get("")
async def search_routes(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    origin: str | None = Query(None),
    destination: str | None = Query(None),
    date: str | None = Query(None, description="Travel date token; defaults to DEFAULT"),
    pickup: str | None = Query(None, description="Pickup point, or SEMUA for any"),
    dropoff: str | None = Query(None, description="Drop-off point, or SEMUA for any"),
    limit: int = Query(50, ge=1, le=100),
) -> ApiResponse:
    result = await _service.search_routes(db, origin, destination, date, pickup, dropoff, limit)
    return success_response(result.model_dump(), getattr(request.state, "request_id", None))


@router.get("/{route_id}")
async def get_route(
    route_id: int,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    route = await _service.get_route(db, route_id)
    data = asdict(route) | {"label": route.label}
    return success_response(data, getattr(request.state, "request_id", None))
