"""IdentityRepository — looks up the account behind an order's e-mail."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_identity.domain.models import Identity
from src.bk_identity.infrastructure.db_models import UserModel


class IdentityRepository:
    """Stateless repository — instantiate once, reuse across requests."""

    async def find_by_email(self, db: AsyncSession, email: str) -> Identity | None:
        result = await db.execute(select(UserModel).where(UserModel.email == email))
        user = result.scalar_one_or_none()
        if user is None:
            return None
        return Identity(
            email=user.email,
            name=user.name,
            wallet_address=user.wallet_address,
            role=user.role,
        )
