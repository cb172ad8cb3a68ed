"""AccountRepository Protocol: interface contract for persistence layer."""

from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bt_account.domain.models import UserBalance


class AccountRepositoryProtocol(Protocol):
    async def get_balance(self, db: AsyncSession, user_id: str) -> UserBalance | None: ...

    async def credit(
        self, db: AsyncSession, user_id: str, amount: Decimal
    ) -> UserBalance | None: ...

    async def set_frozen(
        self, db: AsyncSession, user_id: str, frozen: bool
    ) -> UserBalance | None: ...
