"""Integer arithmetic utilities for rupiah amounts.

All fares, discounts and charged totals are int (whole rupiah). No float, no Decimal.
"""


def apply_discount(base_fare: int, discount: int) -> int:
    """Return the amount to charge after a discount, floored at zero.

    apply_discount(150000, 20000) -> 130000
    apply_discount(500, 1000)     -> 0
    """
    return max(0, base_fare - discount)


def rupiah_to_display(amount: int) -> str:
    """Convert rupiah to display string: 150000 -> 'Rp150.000', -2500 -> '-Rp2.500'."""
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,}".replace(",", ".")
    return f"{sign}Rp{grouped}"
