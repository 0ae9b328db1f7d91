"""Pydantic schemas for the seat ledger API."""
from pydantic import BaseModel


class HeldSeatsResponse(BaseModel):
    route_label: str
    travel_date: str
    booked_seats: list[str]
