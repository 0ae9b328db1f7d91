# src/bk_order/domain/repository.py
"""OrderRepository Protocol — interface contract for persistence layer."""
from collections.abc import Iterable
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_order.domain.models import Order


class OrderRepositoryProtocol(Protocol):
    async def insert(self, db: AsyncSession, order: Order) -> None: ...

    async def attach_session(
        self, db: AsyncSession, order_ref: str, snap_token: str, redirect_url: str
    ) -> None: ...

    async def get_by_ref(self, db: AsyncSession, order_ref: str) -> Order | None: ...

    async def get_by_tx_hash(self, db: AsyncSession, tx_hash: str) -> Order | None: ...

    async def transition_status(
        self,
        db: AsyncSession,
        order_ref: str,
        sources: Iterable[str],
        target: str,
    ) -> Order | None: ...

    async def record_issuance(
        self, db: AsyncSession, order_ref: str, status: str, tx_hash: str
    ) -> Order | None: ...

    async def list_by_email(self, db: AsyncSession, email: str, limit: int) -> list[Order]: ...

    async def list_recent(self, db: AsyncSession, limit: int) -> list[Order]: ...
