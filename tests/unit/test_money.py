"""Tests for bk_common.money."""

from src.bk_common.money import apply_discount, rupiah_to_display


class TestApplyDiscount:
    def test_subtracts(self) -> None:
        assert apply_discount(150000, 20000) == 130000

    def test_floors_at_zero(self) -> None:
        assert apply_discount(500, 1000) == 0

    def test_zero_discount(self) -> None:
        assert apply_discount(75000, 0) == 75000


class TestRupiahToDisplay:
    def test_thousands_separator(self) -> None:
        assert rupiah_to_display(150000) == "Rp150.000"

    def test_small_amount(self) -> None:
        assert rupiah_to_display(500) == "Rp500"

    def test_millions(self) -> None:
        assert rupiah_to_display(1250000) == "Rp1.250.000"

    def test_negative(self) -> None:
        assert rupiah_to_display(-2500) == "-Rp2.500"
