"""Route catalog domain models — pure dataclasses, no SQLAlchemy dependency."""
from dataclasses import dataclass


@dataclass(frozen=True)
class RouteSnapshot:
    """The parts of a route copied into an order at purchase time.

    Later edits to the catalog (fare, slot, operator) never touch orders that
    already carry a snapshot.
    """
    route_id: int
    label: str  # "<origin> - <destination>"
    operator: str
    departure_time: str  # time slot, e.g. "08:00"
    fare: int  # rupiah
    vehicle_type: str | None = None
    category: str | None = None


@dataclass
class Route:
    id: int
    origin: str
    destination: str
    operator: str
    departure_time: str
    fare: int
    capacity: int = 10
    vehicle_type: str | None = None
    category: str | None = None
    pickup_point: str | None = None
    dropoff_point: str | None = None

    @property
    def label(self) -> str:
        return f"{self.origin} - {self.destination}"

    def snapshot(self) -> RouteSnapshot:
        return RouteSnapshot(
            route_id=self.id,
            label=self.label,
            operator=self.operator,
            departure_time=self.departure_time,
            fare=self.fare,
            vehicle_type=self.vehicle_type,
            category=self.category,
        )
