# src/bk_fare/infrastructure/persistence.py
"""PromoRepository — raw SQL persistence implementation.

Quota consumption is a single atomic UPDATE ... RETURNING guarded by
``quota > 0``. A result of 0 rows means the code is unknown, inactive or
exhausted. The CALLER owns the transaction: the decrement commits or rolls
back together with the order insert.
"""
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_fare.domain.models import Promo

_FIND_REDEEMABLE_SQL = text("""
    SELECT code, active, quota, discount
    FROM promos
    WHERE code = :code AND active = TRUE AND quota > 0
""")

_CONSUME_ONE_SQL = text("""
    UPDATE promos
    SET quota = quota - 1
    WHERE code = :code AND active = TRUE AND quota > 0
    RETURNING code, active, quota + 1 AS quota, discount
""")


def _row_to_promo(row: Any) -> Promo:
    return Promo(
        code=row.code,
        active=row.active,
        quota=row.quota,
        discount=row.discount,
    )


class PromoRepository:
    async def find_redeemable(self, db: AsyncSession, code: str) -> Promo | None:
        result = await db.execute(_FIND_REDEEMABLE_SQL, {"code": code})
        row = result.fetchone()
        return _row_to_promo(row) if row else None

    async def consume_one(self, db: AsyncSession, code: str) -> Promo | None:
        """Decrement quota by one. Returns the promo as it stood when redeemed, or None."""
        result = await db.execute(_CONSUME_ONE_SQL, {"code": code})
        row = result.fetchone()
        return _row_to_promo(row) if row else None
