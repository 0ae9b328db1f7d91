# src/bk_admin/api/router.py
"""Admin REST API."""
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_admin.application.service import AdminService
from src.bk_common.database import get_db_session
from src.bk_common.response import ApiResponse, success_response

router = APIRouter(prefix="/admin", tags=["admin"])
_service = AdminService()


@router.get("/stats")
async def get_stats(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_stats(db)
    return success_response(result, getattr(request.state, "request_id", None))
