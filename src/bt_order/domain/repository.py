# src/bt_order/domain/repository.py
"""OrderRepository Protocol: interface contract for persistence layer."""

from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bt_common.enums import OrderKind
from src.bt_order.domain.models import ServiceOrder, UserSnapshot
from src.bt_pricing.domain.models import PricingQuote


class OrderRepositoryProtocol(Protocol):
    async def lock_user(self, db: AsyncSession, user_id: str) -> UserSnapshot | None: ...

    async def debit_balance(
        self, db: AsyncSession, user_id: str, amount: Decimal
    ) -> Decimal | None: ...

    async def insert_order(
        self,
        db: AsyncSession,
        kind: OrderKind,
        user_id: str,
        listing_id: int,
        status: str,
        quote: PricingQuote,
    ) -> ServiceOrder: ...

    async def list_for_user(
        self,
        db: AsyncSession,
        kind: OrderKind,
        user_id: str,
        status: str | None = None,
    ) -> list[ServiceOrder]: ...

    async def list_all(
        self, db: AsyncSession, kind: OrderKind, status: str | None = None
    ) -> list[ServiceOrder]: ...

    async def get_by_id(
        self, db: AsyncSession, kind: OrderKind, order_id: int
    ) -> ServiceOrder | None: ...

    async def update_status(
        self, db: AsyncSession, kind: OrderKind, order_id: int, status: str
    ) -> ServiceOrder | None: ...

    async def mark_user_viewed(
        self, db: AsyncSession, kind: OrderKind, user_id: str
    ) -> int: ...

    async def mark_admin_viewed(
        self, db: AsyncSession, kind: OrderKind, order_id: int
    ) -> bool: ...

    async def count_user_unread(self, db: AsyncSession, kind: OrderKind, user_id: str) -> int: ...

    async def count_admin_unread(self, db: AsyncSession, kind: OrderKind) -> int: ...

    async def list_trade_statuses(self, db: AsyncSession) -> list[str]: ...

    async def add_trade_status(self, db: AsyncSession, label: str) -> bool: ...
