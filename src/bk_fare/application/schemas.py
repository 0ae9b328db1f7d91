"""Pydantic schemas for the promo API."""
from pydantic import BaseModel, Field


class PromoCheckRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=50)


class PromoCheckResponse(BaseModel):
    valid: bool
    discount: int | None = None
