# src/bk_order/application/schemas.py
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.bk_order.domain.models import Order


class PurchaseRequest(BaseModel):
    route_id: int
    email: EmailStr
    travel_date: str = Field(min_length=1, max_length=32)
    seat_number: str = Field(min_length=1, max_length=10)
    passenger_name: str = Field(min_length=1, max_length=255)
    passenger_id_number: str = Field(min_length=1, max_length=32)
    promo_code: str | None = None
    pickup_point: str | None = Field(default=None, max_length=255)
    dropoff_point: str | None = Field(default=None, max_length=255)

    @field_validator("seat_number", "travel_date")
    @classmethod
    def strip_key_part(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("promo_code")
    @classmethod
    def blank_promo_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class PurchaseResponse(BaseModel):
    order_id: str
    token: str
    redirect_url: str


class OrderResponse(BaseModel):
    order_id: str
    email: str
    route_id: int
    route_label: str
    operator: str
    departure_time: str
    travel_date: str
    seat_number: str
    original_fare: int
    discount: int
    total_amount: int
    passenger_name: str
    pickup_point: str | None = None
    dropoff_point: str | None = None
    vehicle_type: str | None = None
    category: str | None = None
    status: str
    snap_token: str | None = None
    tx_hash: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, order: Order) -> "OrderResponse":
        return cls(
            order_id=order.order_ref,
            email=order.email,
            route_id=order.route_id,
            route_label=order.route_label,
            operator=order.operator,
            departure_time=order.departure_time,
            travel_date=order.travel_date,
            seat_number=order.seat_number,
            original_fare=order.original_fare,
            discount=order.discount,
            total_amount=order.total_amount,
            passenger_name=order.passenger_name,
            pickup_point=order.pickup_point,
            dropoff_point=order.dropoff_point,
            vehicle_type=order.vehicle_type,
            category=order.category,
            status=order.status,
            snap_token=order.snap_token,
            tx_hash=order.tx_hash,
            created_at=order.created_at,
        )


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]


class TicketAttribute(BaseModel):
    trait_type: str
    value: str


class TicketMetadata(BaseModel):
    name: str
    description: str
    image: str
    attributes: list[TicketAttribute]


class VerifyTicketRequest(BaseModel):
    tx_hash: str = Field(min_length=1)


class VerifiedTicket(BaseModel):
    passenger_name: str
    route_label: str
    travel_date: str
    departure_time: str
    seat_number: str
    status: str


class VerifyTicketResponse(BaseModel):
    valid: bool
    data: VerifiedTicket | None = None
