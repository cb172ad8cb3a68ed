"""Pydantic schemas for bt_account API."""

from typing import Any

from pydantic import BaseModel

from src.bt_account.domain.models import UserBalance
from src.bt_common.money import format_rub

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class TopUpRequest(BaseModel):
    amount: Any = None  # rubles; "1 500,50" is accepted


class FreezeBalanceRequest(BaseModel):
    freeze: bool = False


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BalanceResponse(BaseModel):
    user_id: str
    balance: float
    balance_display: str
    balance_frozen: bool
    subscription_status: str

    @classmethod
    def from_domain(cls, account: UserBalance) -> "BalanceResponse":
        return cls(
            user_id=account.user_id,
            balance=float(account.balance),
            balance_display=format_rub(account.balance),
            balance_frozen=account.balance_frozen,
            subscription_status=account.subscription_status,
        )


class TopUpResponse(BaseModel):
    ok: bool = True
    amount: float
    balance: float
    balance_display: str


class FreezeBalanceResponse(BaseModel):
    ok: bool = True
    user_id: str
    balance_frozen: bool
