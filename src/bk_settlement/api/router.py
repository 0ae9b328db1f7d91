# src/bk_settlement/api/router.py
"""bk_settlement REST endpoints.

POST /payments/notification   — gateway webhook; always answers 200 "OK"
POST /payments/check-status   — manual status check for one order
"""
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_common.database import db_handle, get_db_session
from src.bk_common.response import ApiResponse, success_response
from src.bk_settlement.application.reconciler import SettlementReconciler
from src.bk_settlement.application.schemas import CheckStatusRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["payments"])

_reconciler = SettlementReconciler()


@asynccontextmanager
async def _notification_session() -> AsyncIterator[AsyncSession]:
    # Opened by hand so a database outage still ends in a 200 for the gateway.
    await db_handle.connect()
    async with db_handle.session() as session:
        yield session


@router.post("/notification", response_class=PlainTextResponse)
async def gateway_notification(request: Request) -> PlainTextResponse:
    try:
        payload = await request.json()
    except ValueError:
        payload = {}
    try:
        async with _notification_session() as db:
            await _reconciler.handle_gateway_notification(db, payload)
    except Exception:
        logger.exception("Gateway notification could not be processed")
    return PlainTextResponse("OK")


@router.post("/check-status")
async def check_status(
    req: CheckStatusRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _reconciler.check_status(db, req.order_id)
    return success_response(result.model_dump(), getattr(request.state, "request_id", None))
