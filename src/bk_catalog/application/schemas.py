"""Pydantic schemas for the route catalog API."""
from pydantic import BaseModel

from src.bk_catalog.domain.models import Route
from src.bk_seat.domain.models import SeatAvailability


class RouteListing(BaseModel):
    id: int
    origin: str
    destination: str
    label: str
    operator: str
    departure_time: str
    fare: int
    capacity: int
    vehicle_type: str | None = None
    category: str | None = None
    pickup_point: str | None = None
    dropoff_point: str | None = None
    remaining_seats: int
    booked_seats: list[str]
    is_full: bool

    @classmethod
    def from_domain(cls, route: Route, seats: SeatAvailability) -> "RouteListing":
        return cls(
            id=route.id,
            origin=route.origin,
            destination=route.destination,
            label=route.label,
            operator=route.operator,
            departure_time=route.departure_time,
            fare=route.fare,
            capacity=route.capacity,
            vehicle_type=route.vehicle_type,
            category=route.category,
            pickup_point=route.pickup_point,
            dropoff_point=route.dropoff_point,
            remaining_seats=seats.remaining,
            booked_seats=sorted(seats.held),
            is_full=seats.is_full,
        )


class RouteSearchResponse(BaseModel):
    travel_date: str
    items: list[RouteListing]
