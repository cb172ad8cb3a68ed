"""AccountApplicationService: balance view, top-up and admin freeze.

Mutations commit their own transaction; read-only calls run without one.
"""

import logging
import math
import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.bt_account.application.schemas import (
    BalanceResponse,
    FreezeBalanceResponse,
    TopUpResponse,
)
from src.bt_account.domain.repository import AccountRepositoryProtocol
from src.bt_account.infrastructure.persistence import AccountRepository
from src.bt_common.database import safe_rollback
from src.bt_common.errors import InvalidAmountError, UserNotFoundError
from src.bt_common.money import format_rub, parse_money_like

logger = logging.getLogger(__name__)

# NUMERIC(14,2) upper bound
_MAX_BALANCE = Decimal("999999999999.99")
_CENT = Decimal("0.01")


def parse_top_up_amount(raw: Any) -> Decimal:
    number = parse_money_like(raw)
    if number is None or not math.isfinite(number) or number <= 0:
        raise InvalidAmountError()
    amount = Decimal(str(number)).quantize(_CENT, rounding=ROUND_HALF_UP)
    if amount <= 0 or amount > _MAX_BALANCE:
        raise InvalidAmountError()
    return amount


def _require_uuid(user_id: str) -> str:
    try:
        return str(uuid.UUID(str(user_id)))
    except ValueError:
        raise UserNotFoundError(str(user_id)) from None


class AccountApplicationService:
    def __init__(self, repo: AccountRepositoryProtocol | None = None) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()

    async def get_balance(self, db: AsyncSession, user_id: str) -> BalanceResponse:
        account = await self._repo.get_balance(db, user_id)
        if account is None:
            raise UserNotFoundError(user_id)
        return BalanceResponse.from_domain(account)

    async def top_up(self, db: AsyncSession, user_id: str, raw_amount: Any) -> TopUpResponse:
        amount = parse_top_up_amount(raw_amount)
        try:
            account = await self._repo.credit(db, user_id, amount)
            if account is None:
                raise UserNotFoundError(user_id)
            await db.commit()
        except Exception:
            await safe_rollback(db)
            raise
        logger.info("Balance top-up for user %s: +%s -> %s", user_id, amount, account.balance)
        return TopUpResponse(
            amount=float(amount),
            balance=float(account.balance),
            balance_display=format_rub(account.balance),
        )

    async def set_balance_frozen(
        self, db: AsyncSession, user_id: str, frozen: bool
    ) -> FreezeBalanceResponse:
        user_id = _require_uuid(user_id)
        try:
            account = await self._repo.set_frozen(db, user_id, frozen)
            if account is None:
                raise UserNotFoundError(user_id)
            await db.commit()
        except Exception:
            await safe_rollback(db)
            raise
        logger.warning("Balance of user %s %s", user_id, "frozen" if frozen else "unfrozen")
        return FreezeBalanceResponse(user_id=account.user_id, balance_frozen=account.balance_frozen)
