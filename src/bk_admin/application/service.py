# src/bk_admin/application/service.py
"""Admin application service — sales statistics."""
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_common.enums import PAID_STATUSES
from src.bk_common.money import rupiah_to_display
from src.bk_order.application.schemas import OrderResponse
from src.bk_order.domain.repository import OrderRepositoryProtocol
from src.bk_order.infrastructure.persistence import OrderRepository

RECENT_ORDERS_LIMIT = 5

_STATS_SQL = text("""
    SELECT
        COUNT(*) AS total_tickets,
        COALESCE(SUM(total_amount), 0) AS total_revenue
    FROM orders
    WHERE status = ANY(string_to_array(CAST(:paid_csv AS TEXT), ','))
""")


class AdminService:
    def __init__(self, orders: OrderRepositoryProtocol | None = None) -> None:
        self._orders: OrderRepositoryProtocol = orders or OrderRepository()

    async def get_stats(self, db: AsyncSession) -> dict[str, Any]:
        paid_csv = ",".join(s.value for s in PAID_STATUSES)
        row = (await db.execute(_STATS_SQL, {"paid_csv": paid_csv})).fetchone()
        total_tickets = int(row.total_tickets) if row else 0
        total_revenue = int(row.total_revenue) if row else 0
        recent = await self._orders.list_recent(db, RECENT_ORDERS_LIMIT)
        return {
            "total_tickets": total_tickets,
            "total_revenue": total_revenue,
            "total_revenue_display": rupiah_to_display(total_revenue),
            "recent_orders": [
                OrderResponse.from_domain(o).model_dump(mode="json") for o in recent
            ],
        }
