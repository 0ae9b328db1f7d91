"""Pure pricing rules.

final_price = max(0, base_fare - discount). A promo only applies when it is
redeemable; an unknown or exhausted code quietly prices at the base fare.
"""
from src.bk_common.errors import InvalidAmountError
from src.bk_common.money import apply_discount
from src.bk_fare.domain.models import PriceQuote, Promo


def quote_price(base_fare: int, promo: Promo | None) -> PriceQuote:
    if promo is None or not promo.is_redeemable:
        return PriceQuote(base_fare=base_fare, final_price=base_fare)
    return PriceQuote(
        base_fare=base_fare,
        final_price=apply_discount(base_fare, promo.discount),
        discount_applied=promo.discount,
        promo_consumed=promo.code,
    )


def ensure_chargeable(quote: PriceQuote, minimum: int) -> PriceQuote:
    """Reject quotes the payment gateway cannot charge (zero or negative)."""
    if quote.final_price < minimum:
        raise InvalidAmountError(quote.final_price, minimum)
    return quote
