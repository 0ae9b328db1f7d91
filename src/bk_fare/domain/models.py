"""Fare domain models — pure dataclasses, no SQLAlchemy dependency."""
from dataclasses import dataclass


@dataclass
class Promo:
    code: str
    active: bool
    quota: int  # remaining redemptions, never negative
    discount: int  # rupiah

    @property
    def is_redeemable(self) -> bool:
        return self.active and self.quota > 0


@dataclass(frozen=True)
class PriceQuote:
    base_fare: int
    final_price: int
    discount_applied: int = 0
    promo_consumed: str | None = None  # promo code whose quota was decremented
