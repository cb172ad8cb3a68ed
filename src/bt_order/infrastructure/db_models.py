"""SQLAlchemy ORM models for order tables (DDL reference only; queries use raw SQL).

Tables are created by Alembic migrations 005 (inspections) and 006 (trade_orders).
No updated_at trigger on these tables: stamping a viewed marker must not
make the order unread again.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.bt_common.database import Base


class _OrderColumns:
    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False
    )
    listing_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("listings.id"), nullable=False
    )
    base_price: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    discount_percent: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    final_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    service_tier: Mapped[str | None] = mapped_column(String(200), nullable=True)
    lot_price_estimate: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    user_last_viewed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    admin_last_viewed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class InspectionORM(_OrderColumns, Base):
    __tablename__ = "inspections"

    status: Mapped[str] = mapped_column(String(200), nullable=False)


class TradeOrderStatusORM(Base):
    __tablename__ = "trade_order_statuses"

    label: Mapped[str] = mapped_column(String(200), primary_key=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class TradeOrderORM(_OrderColumns, Base):
    __tablename__ = "trade_orders"

    status: Mapped[str] = mapped_column(
        String(200), ForeignKey("trade_order_statuses.label"), nullable=False
    )
