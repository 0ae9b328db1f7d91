# src/bk_order/infrastructure/db_models.py
"""SQLAlchemy ORM model for the orders table (DDL reference only — queries use raw SQL)."""
from datetime import datetime

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    Index,
    String,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.bk_common.database import Base


class OrderORM(Base):
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint(
            "status IN ('PENDING','CHALLENGE','LUNAS','GAGAL','CANCEL',"
            "'MINTED','LUNAS_MINT_FAILED')",
            name="ck_orders_status",
        ),
        CheckConstraint("total_amount >= 0", name="ck_orders_total_gte_0"),
        Index(
            "uq_orders_active_seat",
            "route_label",
            "operator",
            "departure_time",
            "travel_date",
            "seat_number",
            unique=True,
            postgresql_where=text("status NOT IN ('CANCEL', 'GAGAL')"),
        ),
        Index("idx_orders_email_created", "email", "created_at"),
        Index("idx_orders_tx_hash", "tx_hash"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    order_ref: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    route_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    route_label: Mapped[str] = mapped_column(String(255), nullable=False)
    operator: Mapped[str] = mapped_column(String(100), nullable=False)
    departure_time: Mapped[str] = mapped_column(String(20), nullable=False)
    travel_date: Mapped[str] = mapped_column(String(32), nullable=False)
    seat_number: Mapped[str] = mapped_column(String(10), nullable=False)
    original_fare: Mapped[int] = mapped_column(BigInteger, nullable=False)
    discount: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    total_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    passenger_name: Mapped[str] = mapped_column(String(255), nullable=False)
    passenger_id_number: Mapped[str] = mapped_column(String(32), nullable=False)
    pickup_point: Mapped[str | None] = mapped_column(String(255), nullable=True)
    dropoff_point: Mapped[str | None] = mapped_column(String(255), nullable=True)
    vehicle_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="PENDING")
    snap_token: Mapped[str | None] = mapped_column(String(255), nullable=True)
    redirect_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    tx_hash: Mapped[str | None] = mapped_column(String(128), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
