"""Pricing domain models: pure dataclasses.

PricingConfig is built once from settings at startup and passed into the
services; pricing functions never read module-level settings themselves.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from src.bt_common.enums import TradePricingMode

if TYPE_CHECKING:
    from config.settings import Settings


@dataclass(frozen=True)
class PriceTier:
    label: str
    amount: int                  # flat service fee, rubles
    max_amount: int | None       # lot price ceiling; None = unbounded
    sort_order: float = 0
    id: int | None = None

    @property
    def ceiling(self) -> float:
        return math.inf if self.max_amount is None else float(self.max_amount)

    @property
    def is_unbounded(self) -> bool:
        return self.max_amount is None


DEFAULT_TRADE_PRICE_TIERS: tuple[PriceTier, ...] = (
    PriceTier("Лот до 500 000 ₽", 15_000, 500_000, 10),
    PriceTier("Лот до 1 500 000 ₽", 25_000, 1_500_000, 20),
    PriceTier("Лот до 3 000 000 ₽", 35_000, 3_000_000, 30),
    PriceTier("Лот свыше 3 000 000 ₽", 50_000, None, 40),
)


@dataclass(frozen=True)
class PricingConfig:
    trade_tiers: tuple[PriceTier, ...] = DEFAULT_TRADE_PRICE_TIERS
    inspection_tiers: tuple[PriceTier, ...] = (PriceTier("Осмотр лота", 12_000, None, 10),)
    pro_discount_trade_percent: float = 30
    pro_discount_inspection_percent: float = 50
    default_deposit_percent: float = 10
    trade_pricing_mode: TradePricingMode = TradePricingMode.TIERS
    detail_max_depth: int = 32

    @classmethod
    def from_settings(cls, s: "Settings") -> "PricingConfig":
        return cls(
            inspection_tiers=(PriceTier("Осмотр лота", s.INSPECTION_BASE_PRICE, None, 10),),
            pro_discount_trade_percent=s.PRO_DISCOUNT_TRADE_PERCENT,
            pro_discount_inspection_percent=s.PRO_DISCOUNT_INSPECTION_PERCENT,
            default_deposit_percent=s.DEFAULT_DEPOSIT_PERCENT,
            trade_pricing_mode=TradePricingMode(s.TRADE_PRICING_MODE),
            detail_max_depth=s.DETAIL_SCAN_MAX_DEPTH,
        )


@dataclass(frozen=True)
class PricingQuote:
    base_price: int
    discount_percent: float
    final_amount: int
    tier_label: str | None = None
    lot_price_estimate: int | None = None
    deposit_amount: int | None = None
    deposit_percent: float | None = None


@dataclass
class TradePricingSettings:
    deposit_percent: float
    updated_at: datetime | None = None
