"""PricingRepository Protocol: dependency inversion for testability."""

from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bt_pricing.domain.models import PriceTier, TradePricingSettings


class PricingRepositoryProtocol(Protocol):
    async def list_tier_rows(self, db: AsyncSession) -> list[dict[str, Any]]: ...

    async def create_tier(self, db: AsyncSession, tier: PriceTier) -> dict[str, Any]: ...

    async def update_tier(
        self, db: AsyncSession, tier_id: int, tier: PriceTier
    ) -> dict[str, Any] | None: ...

    async def delete_tier(self, db: AsyncSession, tier_id: int) -> bool: ...

    async def get_settings(self, db: AsyncSession) -> TradePricingSettings | None: ...

    async def save_deposit_percent(
        self, db: AsyncSession, deposit_percent: float
    ) -> TradePricingSettings: ...
