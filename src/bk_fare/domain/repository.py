# src/bk_fare/domain/repository.py
"""PromoRepository Protocol — interface contract for persistence layer."""
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_fare.domain.models import Promo


class PromoRepositoryProtocol(Protocol):
    async def find_redeemable(self, db: AsyncSession, code: str) -> Promo | None: ...

    async def consume_one(self, db: AsyncSession, code: str) -> Promo | None: ...
