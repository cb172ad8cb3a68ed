"""PricingApplicationService: quotes for orders plus admin tier/settings management.

Quote methods are read-only and never mutate state. Admin mutations commit
their own transaction (rollback on any failure).
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.bt_common.database import safe_rollback
from src.bt_common.enums import OrderKind, TradePricingMode
from src.bt_common.errors import (
    InvalidListingIdError,
    InvalidPercentError,
    InvalidTierError,
    ListingNotFoundError,
    TierNotFoundError,
)
from src.bt_common.money import BIGINT_MAX
from src.bt_listing.domain.listing_ref import parse_listing_ref
from src.bt_listing.domain.models import Listing
from src.bt_listing.domain.repository import ListingRepositoryProtocol
from src.bt_listing.infrastructure.persistence import ListingRepository
from src.bt_pricing.application.schemas import (
    AdminPricingResponse,
    PricingSettingsOut,
    PublicPricingResponse,
    QuoteResponse,
    TierOut,
    TierRequest,
    TierRowOut,
)
from src.bt_pricing.domain.calculator import (
    compute_deposit_quote,
    compute_tier_quote,
    normalize_deposit_percent,
)
from src.bt_pricing.domain.models import PriceTier, PricingConfig, PricingQuote
from src.bt_pricing.domain.repository import PricingRepositoryProtocol
from src.bt_pricing.domain.tiers import effective_tiers, normalize_tier
from src.bt_pricing.infrastructure.persistence import PricingRepository

logger = logging.getLogger(__name__)

# trade_pricing_tiers column limits
TIER_LABEL_MAX_LENGTH = 200
SORT_ORDER_RANGE = (-(2**31), 2**31 - 1)


class PricingApplicationService:
    def __init__(
        self,
        config: PricingConfig | None = None,
        repo: PricingRepositoryProtocol | None = None,
        listings: ListingRepositoryProtocol | None = None,
    ) -> None:
        self._config = config or PricingConfig.from_settings(settings)
        self._repo: PricingRepositoryProtocol = repo or PricingRepository()
        self._listings: ListingRepositoryProtocol = listings or ListingRepository()

    @property
    def config(self) -> PricingConfig:
        return self._config

    # ------------------------------------------------------------------
    # Quotes
    # ------------------------------------------------------------------

    async def load_trade_tiers(self, db: AsyncSession) -> list[PriceTier]:
        rows = await self._repo.list_tier_rows(db)
        return effective_tiers(rows, self._config.trade_tiers)

    async def load_deposit_percent(self, db: AsyncSession) -> float:
        stored = await self._repo.get_settings(db)
        if stored is None:
            return self._config.default_deposit_percent
        return normalize_deposit_percent(
            stored.deposit_percent, self._config.default_deposit_percent
        ) or 0.0

    def quote_inspection(self, listing: Listing, subscription_status: Any) -> PricingQuote:
        return compute_tier_quote(
            listing,
            self._config.inspection_tiers,
            subscription_status,
            self._config.pro_discount_inspection_percent,
            self._config.detail_max_depth,
        )

    async def quote_trade_order(
        self, db: AsyncSession, listing: Listing, subscription_status: Any
    ) -> PricingQuote:
        if self._config.trade_pricing_mode is TradePricingMode.DEPOSIT:
            return compute_deposit_quote(
                listing,
                await self.load_deposit_percent(db),
                subscription_status,
                self._config.pro_discount_trade_percent,
                self._config.default_deposit_percent,
                self._config.detail_max_depth,
            )
        return compute_tier_quote(
            listing,
            await self.load_trade_tiers(db),
            subscription_status,
            self._config.pro_discount_trade_percent,
            self._config.detail_max_depth,
        )

    async def quote_for_listing(
        self,
        db: AsyncSession,
        raw_listing_id: Any,
        subscription_status: Any,
        kind: OrderKind,
    ) -> QuoteResponse:
        ref = parse_listing_ref(raw_listing_id, settings.MAX_LISTING_ID_LENGTH)
        if ref is None:
            raise InvalidListingIdError()
        listing = await self._listings.get_by_ref(db, ref)
        if listing is None:
            raise ListingNotFoundError(str(ref))
        if kind is OrderKind.INSPECTION:
            quote = self.quote_inspection(listing, subscription_status)
        else:
            quote = await self.quote_trade_order(db, listing, subscription_status)
        return QuoteResponse.from_quote(listing.id, quote)

    async def get_public_pricing(self, db: AsyncSession) -> PublicPricingResponse:
        tiers = await self.load_trade_tiers(db)
        return PublicPricingResponse(
            deposit_percent=await self.load_deposit_percent(db),
            pro_discount_percent=self._config.pro_discount_trade_percent,
            mode=self._config.trade_pricing_mode.value,
            tiers=[TierOut.from_domain(t) for t in tiers],
        )

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    async def get_admin_pricing(self, db: AsyncSession) -> AdminPricingResponse:
        rows = await self._repo.list_tier_rows(db)
        return AdminPricingResponse(
            settings=PricingSettingsOut(deposit_percent=await self.load_deposit_percent(db)),
            items=[TierRowOut(**{k: row[k] for k in TierRowOut.model_fields}) for row in rows],
            effective=[
                TierOut.from_domain(t) for t in effective_tiers(rows, self._config.trade_tiers)
            ],
        )

    async def update_deposit_percent(self, db: AsyncSession, raw: Any) -> PricingSettingsOut:
        percent = normalize_deposit_percent(raw)
        if percent is None:
            raise InvalidPercentError()
        try:
            saved = await self._repo.save_deposit_percent(db, percent)
            await db.commit()
        except Exception:
            await safe_rollback(db)
            raise
        logger.info("Trade deposit percent set to %s", saved.deposit_percent)
        return PricingSettingsOut(deposit_percent=saved.deposit_percent)

    def _validated_tier(self, body: TierRequest) -> PriceTier:
        tier = normalize_tier(body.as_row())
        if tier is None:
            raise InvalidTierError("label and a non-negative amount are required")
        if len(tier.label) > TIER_LABEL_MAX_LENGTH:
            raise InvalidTierError(f"label is longer than {TIER_LABEL_MAX_LENGTH} characters")
        if tier.amount > BIGINT_MAX or (tier.max_amount or 0) > BIGINT_MAX:
            raise InvalidTierError("amount is out of range")
        low, high = SORT_ORDER_RANGE
        if not low <= int(tier.sort_order) <= high:
            raise InvalidTierError("sort order is out of range")
        return tier

    async def create_tier(self, db: AsyncSession, body: TierRequest) -> TierRowOut:
        tier = self._validated_tier(body)
        try:
            row = await self._repo.create_tier(db, tier)
            await db.commit()
        except Exception:
            await safe_rollback(db)
            raise
        return TierRowOut(**{k: row[k] for k in TierRowOut.model_fields})

    async def update_tier(self, db: AsyncSession, tier_id: int, body: TierRequest) -> TierRowOut:
        tier = self._validated_tier(body)
        try:
            row = await self._repo.update_tier(db, tier_id, tier)
            if row is None:
                raise TierNotFoundError(tier_id)
            await db.commit()
        except Exception:
            await safe_rollback(db)
            raise
        return TierRowOut(**{k: row[k] for k in TierRowOut.model_fields})

    async def delete_tier(self, db: AsyncSession, tier_id: int) -> None:
        try:
            if not await self._repo.delete_tier(db, tier_id):
                raise TierNotFoundError(tier_id)
            await db.commit()
        except Exception:
            await safe_rollback(db)
            raise
