"""Order domain model — pure dataclass, no SQLAlchemy dependency."""
from dataclasses import dataclass
from datetime import datetime

from src.bk_common.enums import SEAT_RELEASING_STATUSES
from src.bk_seat.domain.models import SeatKey

# Stored in tx_hash when the mint call failed; never a real transaction hash.
MINT_FAILED_SENTINEL = "TRANSACTION_FAILED"


@dataclass
class Order:
    id: str
    order_ref: str  # gateway order_id, "<prefix>-<epoch ms>-<random>"
    email: str
    # Route snapshot taken at purchase time
    route_id: int
    route_label: str  # "<origin> - <destination>"
    operator: str
    departure_time: str
    # Seat
    travel_date: str  # opaque token, never parsed as a calendar date
    seat_number: str  # alphanumeric labels allowed ("12A")
    # Pricing, whole rupiah
    original_fare: int
    discount: int
    total_amount: int
    # Passenger
    passenger_name: str
    passenger_id_number: str
    pickup_point: str | None = None
    dropoff_point: str | None = None
    vehicle_type: str | None = None
    category: str | None = None
    # Lifecycle
    status: str = "PENDING"
    snap_token: str | None = None
    redirect_url: str | None = None
    tx_hash: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def seat_key(self) -> SeatKey:
        return SeatKey(
            route_label=self.route_label,
            operator=self.operator,
            departure_time=self.departure_time,
            travel_date=self.travel_date,
            seat_number=self.seat_number,
        )

    @property
    def holds_seat(self) -> bool:
        return self.status not in SEAT_RELEASING_STATUSES

    @property
    def has_valid_ticket_hash(self) -> bool:
        return bool(self.tx_hash) and self.tx_hash != MINT_FAILED_SENTINEL
