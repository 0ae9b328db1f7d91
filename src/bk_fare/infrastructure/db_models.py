# src/bk_fare/infrastructure/db_models.py
"""SQLAlchemy ORM model for the promos table (DDL reference only — queries use raw SQL)."""
from sqlalchemy import Boolean, CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.bk_common.database import Base


class PromoORM(Base):
    __tablename__ = "promos"
    __table_args__ = (
        CheckConstraint("quota >= 0", name="ck_promos_quota_gte_0"),
        CheckConstraint("discount >= 0", name="ck_promos_discount_gte_0"),
    )

    code: Mapped[str] = mapped_column(String(50), primary_key=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    quota: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    discount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
