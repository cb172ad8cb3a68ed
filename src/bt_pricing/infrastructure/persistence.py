"""PricingRepository: raw SQL access to trade_pricing_tiers / trade_pricing_settings.

Transaction ownership: the CALLER commits or rolls back.
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bt_pricing.domain.models import PriceTier, TradePricingSettings

_TIER_COLUMNS = "id, label, amount, max_amount, sort_order, created_at, updated_at"

_LIST_TIERS_SQL = text(f"""
    SELECT {_TIER_COLUMNS}
    FROM trade_pricing_tiers
    ORDER BY sort_order ASC, max_amount ASC NULLS LAST, id ASC
""")

_INSERT_TIER_SQL = text(f"""
    INSERT INTO trade_pricing_tiers (label, amount, max_amount, sort_order)
    VALUES (:label, :amount, :max_amount, :sort_order)
    RETURNING {_TIER_COLUMNS}
""")

_UPDATE_TIER_SQL = text(f"""
    UPDATE trade_pricing_tiers
    SET label = :label, amount = :amount, max_amount = :max_amount,
        sort_order = :sort_order, updated_at = NOW()
    WHERE id = :id
    RETURNING {_TIER_COLUMNS}
""")

_DELETE_TIER_SQL = text("DELETE FROM trade_pricing_tiers WHERE id = :id RETURNING id")

_GET_SETTINGS_SQL = text("""
    SELECT deposit_percent, updated_at
    FROM trade_pricing_settings
    WHERE id = 1
""")

_UPSERT_SETTINGS_SQL = text("""
    INSERT INTO trade_pricing_settings (id, deposit_percent)
    VALUES (1, :deposit_percent)
    ON CONFLICT (id) DO UPDATE
        SET deposit_percent = EXCLUDED.deposit_percent,
            updated_at = NOW()
    RETURNING deposit_percent, updated_at
""")


def _row_to_tier_dict(row: Any) -> dict[str, Any]:
    return {
        "id": row.id,
        "label": row.label,
        "amount": row.amount,
        "max_amount": row.max_amount,
        "sort_order": row.sort_order,
        "created_at": row.created_at,
        "updated_at": row.updated_at,
    }


def _row_to_settings(row: Any) -> TradePricingSettings:
    return TradePricingSettings(
        deposit_percent=float(row.deposit_percent),
        updated_at=row.updated_at,
    )


def _tier_params(tier: PriceTier) -> dict[str, Any]:
    return {
        "label": tier.label,
        "amount": tier.amount,
        "max_amount": tier.max_amount,
        "sort_order": int(tier.sort_order),
    }


class PricingRepository:
    """Concrete implementation of PricingRepositoryProtocol."""

    async def list_tier_rows(self, db: AsyncSession) -> list[dict[str, Any]]:
        result = await db.execute(_LIST_TIERS_SQL)
        return [_row_to_tier_dict(row) for row in result.fetchall()]

    async def create_tier(self, db: AsyncSession, tier: PriceTier) -> dict[str, Any]:
        result = await db.execute(_INSERT_TIER_SQL, _tier_params(tier))
        return _row_to_tier_dict(result.fetchone())

    async def update_tier(
        self, db: AsyncSession, tier_id: int, tier: PriceTier
    ) -> dict[str, Any] | None:
        result = await db.execute(_UPDATE_TIER_SQL, {"id": tier_id, **_tier_params(tier)})
        row = result.fetchone()
        return _row_to_tier_dict(row) if row else None

    async def delete_tier(self, db: AsyncSession, tier_id: int) -> bool:
        result = await db.execute(_DELETE_TIER_SQL, {"id": tier_id})
        return result.fetchone() is not None

    async def get_settings(self, db: AsyncSession) -> TradePricingSettings | None:
        result = await db.execute(_GET_SETTINGS_SQL)
        row = result.fetchone()
        return _row_to_settings(row) if row else None

    async def save_deposit_percent(
        self, db: AsyncSession, deposit_percent: float
    ) -> TradePricingSettings:
        result = await db.execute(_UPSERT_SETTINGS_SQL, {"deposit_percent": deposit_percent})
        return _row_to_settings(result.fetchone())
