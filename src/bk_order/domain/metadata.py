"""Ticket metadata — the descriptive JSON a minted ticket token points at.

Deterministic: the same order always projects to the same document, so the
token URI can be fetched any number of times by the minting network.
"""
from src.bk_order.domain.models import Order


def metadata_uri(public_base_url: str, order_ref: str) -> str:
    return f"{public_base_url.rstrip('/')}/api/v1/tickets/metadata/{order_ref}"


def build_ticket_metadata(order: Order, image_url: str) -> dict:
    return {
        "name": f"Bus Ticket {order.route_label}",
        "description": (
            f"Trip {order.route_label} for {order.passenger_name} on {order.travel_date}"
        ),
        "image": image_url,
        "attributes": [
            {"trait_type": "Passenger", "value": order.passenger_name},
            {"trait_type": "Route", "value": order.route_label},
            {"trait_type": "Date", "value": order.travel_date},
            {"trait_type": "Seat", "value": str(order.seat_number)},
        ],
    }
