"""bk_seat REST endpoints.

GET /seats          — seats already held for a route label on a travel date
GET /seats/check    — whether one seat key is currently held
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_common.database import get_db_session
from src.bk_common.response import ApiResponse, success_response
from src.bk_seat.application.service import SeatLedgerService
from src.bk_seat.domain.models import SeatKey

router = APIRouter(prefix="/seats", tags=["seats"])

_service = SeatLedgerService()


@router.get("")
async def list_held_seats(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    route_label: str = Query(..., min_length=1, description="e.g. 'Medan - Parapat'"),
    date: str = Query(..., min_length=1, description="Travel date token"),
    operator: str | None = Query(None),
    departure_time: str | None = Query(None, description="Time slot, e.g. 08:00"),
) -> ApiResponse:
    result = await _service.seat_map(db, route_label, date, operator, departure_time)
    return success_response(result.model_dump(), getattr(request.state, "request_id", None))


@router.get("/check")
async def check_seat(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    route_label: str = Query(..., min_length=1),
    operator: str = Query(..., min_length=1),
    departure_time: str = Query(..., min_length=1),
    date: str = Query(..., min_length=1),
    seat_number: str = Query(..., min_length=1),
) -> ApiResponse:
    key = SeatKey(route_label, operator, departure_time, date, seat_number)
    held = await _service.is_seat_held(db, key)
    return success_response(
        {"seat_number": seat_number, "held": held},
        getattr(request.state, "request_id", None),
    )
