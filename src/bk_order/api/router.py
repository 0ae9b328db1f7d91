# src/bk_order/api/router.py
"""bk_order REST endpoints.

POST /orders                      — purchase a seat, returns the gateway session
GET  /orders?email=               — an account's orders, newest first
GET  /tickets/metadata/{order_id} — token metadata document (bare JSON, no envelope)
POST /tickets/verify              — look up a ticket by its mint hash
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from pydantic import EmailStr
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_common.database import get_db_session
from src.bk_common.response import ApiResponse, success_response
from src.bk_order.application.schemas import (
    PurchaseRequest,
    TicketMetadata,
    VerifyTicketRequest,
)
from src.bk_order.application.service import OrderApplicationService

router = APIRouter(prefix="/orders", tags=["orders"])
ticket_router = APIRouter(prefix="/tickets", tags=["tickets"])

_service = OrderApplicationService()


@router.post("", status_code=201)
async def purchase(
    req: PurchaseRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.purchase(db, req)
    return success_response(result.model_dump(), getattr(request.state, "request_id", None))


@router.get("")
async def list_orders(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    email: EmailStr = Query(..., description="Account e-mail"),
) -> ApiResponse:
    result = await _service.list_orders(db, str(email))
    return success_response(
        result.model_dump(mode="json"), getattr(request.state, "request_id", None)
    )


@ticket_router.get("/metadata/{order_id}", response_model=TicketMetadata)
async def ticket_metadata(
    order_id: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> TicketMetadata:
    return await _service.metadata_for(db, order_id)


@ticket_router.post("/verify")
async def verify_ticket(
    req: VerifyTicketRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.verify_ticket(db, req.tx_hash)
    return success_response(result.model_dump(), getattr(request.state, "request_id", None))
