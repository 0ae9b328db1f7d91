"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.bk_admin.api.router import router as admin_router
from src.bk_catalog.api.router import router as route_router
from src.bk_common.background import drain_detached
from src.bk_common.database import db_handle
from src.bk_common.errors import AppError, DatabaseUnavailableError
from src.bk_common.request_log import RequestLogMiddleware
from src.bk_common.response import error_response
from src.bk_fare.api.router import router as promo_router
from src.bk_issuance.application.service import close_issuance_clients
from src.bk_order.api.router import router as order_router
from src.bk_order.api.router import ticket_router
from src.bk_payment.application.service import close_payment_gateway
from src.bk_seat.api.router import router as seat_router
from src.bk_settlement.api.router import router as payment_router

logger = logging.getLogger(__name__)

# Seconds to wait for in-flight e-ticket deliveries on shutdown.
_SHUTDOWN_DRAIN_SECONDS = 10.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify the DB (requests retry if it is not up yet). Shutdown: drain and dispose."""
    try:
        await db_handle.connect()
    except DatabaseUnavailableError as exc:
        logger.error("Starting without database: %s", exc.message)
    yield
    await drain_detached(timeout=_SHUTDOWN_DRAIN_SECONDS)
    await close_payment_gateway()
    await close_issuance_clients()
    await db_handle.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        resp.request_id = request_id
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(route_router, prefix="/api/v1")
app.include_router(seat_router, prefix="/api/v1")
app.include_router(promo_router, prefix="/api/v1")
app.include_router(order_router, prefix="/api/v1")
app.include_router(ticket_router, prefix="/api/v1")
app.include_router(payment_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {
        "status": "ok",
        "version": "0.1.0",
        "database": "ready" if db_handle.is_ready else "not connected",
    }
