"""bk_fare REST endpoints.

POST /promos/check   — is a promo code currently redeemable, and for how much
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_common.database import get_db_session
from src.bk_common.response import ApiResponse, success_response
from src.bk_fare.application.schemas import PromoCheckRequest
from src.bk_fare.application.service import FareResolver

router = APIRouter(prefix="/promos", tags=["promos"])

_service = FareResolver()


@router.post("/check")
async def check_promo(
    req: PromoCheckRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.check_promo(db, req.code)
    return success_response(result.model_dump(), getattr(request.state, "request_id", None))
