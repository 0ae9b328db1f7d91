"""Unit tests for bk_order Pydantic schemas."""
import pytest
from pydantic import ValidationError

from src.bk_order.application.schemas import PurchaseRequest

_BASE = {
    "route_id": 1,
    "email": "rina@example.com",
    "travel_date": "2025-06-01",
    "seat_number": "12A",
    "passenger_name": "Rina Siregar",
    "passenger_id_number": "1271010101900001",
}


class TestPurchaseRequest:
    def test_valid_request(self) -> None:
        req = PurchaseRequest(**_BASE, pickup_point="Terminal Amplas")
        assert req.pickup_point == "Terminal Amplas"
        assert req.dropoff_point is None
        assert req.promo_code is None

    def test_key_parts_are_stripped(self) -> None:
        req = PurchaseRequest(**{**_BASE, "seat_number": " 12A ", "travel_date": " DEFAULT "})
        assert (req.seat_number, req.travel_date) == ("12A", "DEFAULT")

    def test_blank_seat_raises(self) -> None:
        with pytest.raises(ValidationError):
            PurchaseRequest(**{**_BASE, "seat_number": "   "})

    def test_blank_promo_is_none(self) -> None:
        assert PurchaseRequest(**_BASE, promo_code="  ").promo_code is None

    @pytest.mark.parametrize("field", ["pickup_point", "dropoff_point"])
    def test_point_longer_than_column_raises(self, field: str) -> None:
        with pytest.raises(ValidationError):
            PurchaseRequest(**_BASE, **{field: "x" * 256})

    @pytest.mark.parametrize("field", ["pickup_point", "dropoff_point"])
    def test_point_at_column_width_accepted(self, field: str) -> None:
        req = PurchaseRequest(**_BASE, **{field: "x" * 255})
        assert len(getattr(req, field)) == 255
