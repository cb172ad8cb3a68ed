"""Pydantic schemas for bt_pricing API."""

from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from src.bt_pricing.domain.models import PriceTier, PricingQuote

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class DepositPercentRequest(BaseModel):
    # "12,5" and 12.5 are both accepted
    deposit_percent: Any = Field(
        None,
        validation_alias=AliasChoices("depositPercent", "deposit_percent", "percent"),
    )


class TierRequest(BaseModel):
    label: Any = None
    amount: Any = None
    max_amount: Any = Field(None, validation_alias=AliasChoices("maxAmount", "max_amount"))
    sort_order: Any = Field(None, validation_alias=AliasChoices("sortOrder", "sort_order"))

    def as_row(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "amount": self.amount,
            "max_amount": self.max_amount,
            "sort_order": self.sort_order,
        }


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class TierOut(BaseModel):
    id: int | None
    label: str
    amount: int
    max_amount: int | None
    sort_order: float

    @classmethod
    def from_domain(cls, tier: PriceTier) -> "TierOut":
        return cls(
            id=tier.id,
            label=tier.label,
            amount=tier.amount,
            max_amount=tier.max_amount,
            sort_order=tier.sort_order,
        )


class TierRowOut(BaseModel):
    """Raw admin row as stored, before normalization."""

    id: int
    label: str
    amount: int
    max_amount: int | None
    sort_order: int


class PricingSettingsOut(BaseModel):
    deposit_percent: float


class AdminPricingResponse(BaseModel):
    settings: PricingSettingsOut
    items: list[TierRowOut]
    effective: list[TierOut]


class PublicPricingResponse(BaseModel):
    deposit_percent: float
    pro_discount_percent: float
    mode: str
    tiers: list[TierOut]


class QuoteResponse(BaseModel):
    listing_id: int
    base_price: int
    discount_percent: float
    final_amount: int
    service_tier: str | None
    lot_price_estimate: int | None
    deposit_amount: int | None
    deposit_percent: float | None

    @classmethod
    def from_quote(cls, listing_id: int, quote: PricingQuote) -> "QuoteResponse":
        return cls(
            listing_id=listing_id,
            base_price=quote.base_price,
            discount_percent=quote.discount_percent,
            final_amount=quote.final_amount,
            service_tier=quote.tier_label,
            lot_price_estimate=quote.lot_price_estimate,
            deposit_amount=quote.deposit_amount,
            deposit_percent=quote.deposit_percent,
        )
