"""SQLAlchemy ORM model for the listings table (DDL reference only; queries use raw SQL).

Table is created by Alembic migration: alembic/versions/003_create_listings.py
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import BigInteger, DateTime, Numeric, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from src.bt_common.database import Base


class ListingORM(Base):
    __tablename__ = "listings"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    source_id: Mapped[str | None] = mapped_column(String(160), unique=True, nullable=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    region: Mapped[str | None] = mapped_column(String(255), nullable=True)
    asset_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    currency: Mapped[str | None] = mapped_column(String(8), nullable=True)
    start_price: Mapped[Decimal | None] = mapped_column(Numeric(16, 2), nullable=True)
    current_price: Mapped[Decimal | None] = mapped_column(Numeric(16, 2), nullable=True)
    min_price: Mapped[Decimal | None] = mapped_column(Numeric(16, 2), nullable=True)
    max_price: Mapped[Decimal | None] = mapped_column(Numeric(16, 2), nullable=True)
    price: Mapped[Decimal | None] = mapped_column(Numeric(16, 2), nullable=True)
    amount: Mapped[Decimal | None] = mapped_column(Numeric(16, 2), nullable=True)
    lot_price: Mapped[Decimal | None] = mapped_column(Numeric(16, 2), nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    source_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    details: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
