"""AccountRepository: balance reads and mutations on the users table.

Mutations are single atomic UPDATE ... RETURNING statements; a missing row
comes back as None.

Transaction ownership: the CALLER commits or rolls back.
"""

from decimal import Decimal
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bt_account.domain.models import UserBalance

_BALANCE_COLUMNS = "id, balance, balance_frozen, subscription_status"

_GET_BALANCE_SQL = text(f"""
    SELECT {_BALANCE_COLUMNS}
    FROM users
    WHERE id = CAST(:user_id AS UUID)
""")

# Top-ups are allowed on a frozen balance; only debits are blocked
_CREDIT_SQL = text(f"""
    UPDATE users
    SET balance = COALESCE(balance, 0) + :amount, updated_at = NOW()
    WHERE id = CAST(:user_id AS UUID)
    RETURNING {_BALANCE_COLUMNS}
""")

_SET_FROZEN_SQL = text(f"""
    UPDATE users
    SET balance_frozen = :frozen, updated_at = NOW()
    WHERE id = CAST(:user_id AS UUID)
    RETURNING {_BALANCE_COLUMNS}
""")


def _row_to_balance(row: Any) -> UserBalance:
    return UserBalance(
        user_id=str(row.id),
        balance=Decimal(row.balance),
        balance_frozen=bool(row.balance_frozen),
        subscription_status=row.subscription_status,
    )


class AccountRepository:
    """Concrete implementation of AccountRepositoryProtocol."""

    async def get_balance(self, db: AsyncSession, user_id: str) -> UserBalance | None:
        result = await db.execute(_GET_BALANCE_SQL, {"user_id": user_id})
        row = result.fetchone()
        return _row_to_balance(row) if row else None

    async def credit(
        self, db: AsyncSession, user_id: str, amount: Decimal
    ) -> UserBalance | None:
        result = await db.execute(_CREDIT_SQL, {"user_id": user_id, "amount": amount})
        row = result.fetchone()
        return _row_to_balance(row) if row else None

    async def set_frozen(
        self, db: AsyncSession, user_id: str, frozen: bool
    ) -> UserBalance | None:
        result = await db.execute(_SET_FROZEN_SQL, {"user_id": user_id, "frozen": frozen})
        row = result.fetchone()
        return _row_to_balance(row) if row else None
