# src/bk_catalog/infrastructure/db_models.py
"""SQLAlchemy ORM model for the routes table (DDL reference only — queries use raw SQL)."""
from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.bk_common.database import Base


class RouteORM(Base):
    __tablename__ = "routes"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    origin: Mapped[str] = mapped_column(String(100), nullable=False)
    destination: Mapped[str] = mapped_column(String(100), nullable=False)
    operator: Mapped[str] = mapped_column(String(100), nullable=False)
    departure_time: Mapped[str] = mapped_column(String(10), nullable=False)
    fare: Mapped[int] = mapped_column(Integer, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    vehicle_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    pickup_point: Mapped[str | None] = mapped_column(String(200), nullable=True)
    dropoff_point: Mapped[str | None] = mapped_column(String(200), nullable=True)
