"""SQLAlchemy ORM models for pricing tables (DDL reference only; queries use raw SQL).

Tables are created by Alembic migration: alembic/versions/004_create_trade_pricing.py
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, DateTime, Integer, Numeric, SmallInteger, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.bt_common.database import Base


class TradePricingTierORM(Base):
    __tablename__ = "trade_pricing_tiers"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    label: Mapped[str] = mapped_column(String(200), nullable=False)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    max_amount: Mapped[int | None] = mapped_column(BigInteger, nullable=True)  # NULL = unbounded
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )


class TradePricingSettingsORM(Base):
    __tablename__ = "trade_pricing_settings"

    id: Mapped[int] = mapped_column(SmallInteger, primary_key=True)  # always 1
    deposit_percent: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
