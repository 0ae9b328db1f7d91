# src/bk_settlement/application/schemas.py
from pydantic import BaseModel, Field


class CheckStatusRequest(BaseModel):
    order_id: str = Field(min_length=1, max_length=64)


class CheckStatusResponse(BaseModel):
    order_id: str
    order_status: str
    updated: bool
    minting_error: str | None = None
