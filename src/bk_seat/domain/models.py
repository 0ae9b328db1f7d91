"""Seat ledger domain models.

The ledger holds no state of its own: a seat is "held" when an order for the
same seat key exists whose status is not in SEAT_RELEASING_STATUSES. The
write-side guard is the partial unique index on orders (see migration 005).
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class SeatKey:
    route_label: str
    operator: str
    departure_time: str
    travel_date: str  # opaque match token, "DEFAULT" allowed
    seat_number: str


@dataclass(frozen=True)
class SeatAvailability:
    capacity: int
    held: frozenset[str]

    @property
    def remaining(self) -> int:
        return self.capacity - len(self.held)

    @property
    def is_full(self) -> bool:
        return self.remaining <= 0


def availability(capacity: int, held: set[str] | frozenset[str]) -> SeatAvailability:
    return SeatAvailability(capacity=capacity, held=frozenset(held))
