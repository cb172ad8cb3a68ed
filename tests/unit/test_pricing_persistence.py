# tests/unit/test_pricing_persistence.py
"""Unit tests for PricingRepository and AccountRepository using MagicMock AsyncSession."""
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.bt_account.infrastructure.persistence import AccountRepository
from src.bt_pricing.domain.models import PriceTier
from src.bt_pricing.infrastructure.persistence import PricingRepository


def _tier_row(**kwargs: Any) -> MagicMock:
    row = MagicMock()
    row.id = kwargs.get("id", 1)
    row.label = kwargs.get("label", "Лот до 500 000 ₽")
    row.amount = kwargs.get("amount", 15_000)
    row.max_amount = kwargs.get("max_amount", 500_000)
    row.sort_order = kwargs.get("sort_order", 10)
    row.created_at = datetime.now(UTC)
    row.updated_at = datetime.now(UTC)
    return row


def _result(fetchone: Any = None, fetchall: list | None = None) -> MagicMock:
    result = MagicMock()
    result.fetchone.return_value = fetchone
    result.fetchall.return_value = fetchall or []
    return result


@pytest.fixture
def db() -> MagicMock:
    return MagicMock()


class TestTiers:
    async def test_list_rows_as_dicts(self, db: MagicMock) -> None:
        db.execute = AsyncMock(
            return_value=_result(fetchall=[_tier_row(), _tier_row(id=2, max_amount=None)])
        )

        rows = await PricingRepository().list_tier_rows(db)

        assert rows[0]["amount"] == 15_000
        assert rows[1]["max_amount"] is None

    async def test_create_passes_normalized_fields(self, db: MagicMock) -> None:
        db.execute = AsyncMock(return_value=_result(fetchone=_tier_row(id=9)))

        row = await PricingRepository().create_tier(db, PriceTier("X", 1_000, None, 15.0))

        assert row["id"] == 9
        assert db.execute.call_args.args[1] == {
            "label": "X", "amount": 1_000, "max_amount": None, "sort_order": 15,
        }

    async def test_update_missing(self, db: MagicMock) -> None:
        db.execute = AsyncMock(return_value=_result(fetchone=None))
        assert await PricingRepository().update_tier(db, 5, PriceTier("X", 1, None)) is None

    async def test_delete(self, db: MagicMock) -> None:
        db.execute = AsyncMock(return_value=_result(fetchone=MagicMock()))
        assert await PricingRepository().delete_tier(db, 5) is True


class TestSettings:
    async def test_get_missing(self, db: MagicMock) -> None:
        db.execute = AsyncMock(return_value=_result(fetchone=None))
        assert await PricingRepository().get_settings(db) is None

    async def test_save_upserts(self, db: MagicMock) -> None:
        row = MagicMock()
        row.deposit_percent = Decimal("12.50")
        row.updated_at = datetime.now(UTC)
        db.execute = AsyncMock(return_value=_result(fetchone=row))

        saved = await PricingRepository().save_deposit_percent(db, 12.5)

        assert saved.deposit_percent == 12.5
        assert "ON CONFLICT (id) DO UPDATE" in str(db.execute.call_args.args[0])


class TestAccountRepository:
    async def test_credit_maps_row(self, db: MagicMock) -> None:
        row = MagicMock()
        row.id = "3f1c0c9e-0000-4000-8000-000000000001"
        row.balance = Decimal("1500.00")
        row.balance_frozen = True
        row.subscription_status = "pro"
        db.execute = AsyncMock(return_value=_result(fetchone=row))

        account = await AccountRepository().credit(db, row.id, Decimal("500.00"))

        assert account is not None
        assert account.balance == Decimal("1500.00")
        assert account.balance_frozen is True
        assert "NOT balance_frozen" not in str(db.execute.call_args.args[0])

    async def test_set_frozen_missing_user(self, db: MagicMock) -> None:
        db.execute = AsyncMock(return_value=_result(fetchone=None))
        assert await AccountRepository().set_frozen(db, "x", True) is None
