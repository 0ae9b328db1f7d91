# src/bk_identity/domain/repository.py
"""IdentityRepository Protocol — read-only lookups against the identity store."""
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_identity.domain.models import Identity


class IdentityRepositoryProtocol(Protocol):
    async def find_by_email(self, db: AsyncSession, email: str) -> Identity | None: ...
