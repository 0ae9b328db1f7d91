"""FareResolver — prices a purchase and redeems promo quota.

resolve_price runs inside the caller's transaction. When it raises, the
caller rolls back and any quota it consumed is restored with it.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.bk_fare.application.schemas import PromoCheckResponse
from src.bk_fare.domain.models import PriceQuote
from src.bk_fare.domain.pricing import ensure_chargeable, quote_price
from src.bk_fare.domain.repository import PromoRepositoryProtocol
from src.bk_fare.infrastructure.persistence import PromoRepository

logger = logging.getLogger(__name__)


class FareResolver:
    def __init__(
        self,
        repo: PromoRepositoryProtocol | None = None,
        minimum_charge: int | None = None,
    ) -> None:
        self._repo: PromoRepositoryProtocol = repo or PromoRepository()
        self._minimum_charge = (
            settings.MIN_CHARGE_AMOUNT if minimum_charge is None else minimum_charge
        )

    async def resolve_price(
        self, db: AsyncSession, base_fare: int, promo_code: str | None = None
    ) -> PriceQuote:
        promo = None
        if promo_code:
            promo = await self._repo.consume_one(db, promo_code)
            if promo is None:
                # Unknown or exhausted codes fall back to the base fare.
                logger.info("Promo %s not redeemable, charging base fare", promo_code)
        return ensure_chargeable(quote_price(base_fare, promo), self._minimum_charge)

    async def check_promo(self, db: AsyncSession, code: str) -> PromoCheckResponse:
        promo = await self._repo.find_redeemable(db, code)
        if promo is None:
            return PromoCheckResponse(valid=False)
        return PromoCheckResponse(valid=True, discount=promo.discount)
