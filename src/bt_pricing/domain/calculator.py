"""Service fee quotes for inspection and trade orders.

Two policies:
  - flat tiers: lot price estimate -> tier -> flat fee
  - deposit percent: fee = deposit * percent / 100 (trade accompaniment)
Both are total functions; an unknown price or deposit never raises.
"""

from collections.abc import Sequence
from typing import Any

from src.bt_common.money import BIGINT_MAX, parse_money_like, round_half_up
from src.bt_pricing.domain.discount import apply_discount
from src.bt_pricing.domain.estimator import (
    DEFAULT_MAX_DEPTH,
    estimate_deposit,
    estimate_lot_price,
)
from src.bt_pricing.domain.models import PriceTier, PricingQuote
from src.bt_pricing.domain.tiers import resolve_tier


def normalize_deposit_percent(value: Any, fallback: float | None = None) -> float | None:
    """Clamp to [0, 100] and round to 2 decimals; unparseable input -> fallback."""
    number = parse_money_like(value)
    if number is None:
        return fallback
    return round(min(100.0, max(0.0, number)), 2)


def format_percent_label(value: float) -> str:
    """10 -> '10%', 12.5 -> '12.5%'."""
    rounded = round(value, 2)
    if rounded == int(rounded):
        return f"{int(rounded)}%"
    return f"{rounded:g}%"


def _storable_estimate(lot_price: float | None) -> int | None:
    """Rounded estimate, or None when it does not fit the BIGINT order column."""
    if lot_price is None:
        return None
    estimate = round_half_up(lot_price)
    return estimate if abs(estimate) <= BIGINT_MAX else None


def compute_tier_quote(
    listing: Any,
    tiers: Sequence[PriceTier],
    subscription_status: Any,
    pro_percent: float,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> PricingQuote:
    lot_price = estimate_lot_price(listing, max_depth)
    tier = resolve_tier(tiers, lot_price)
    base_price = tier.amount if tier else 0
    discount_percent, final_amount = apply_discount(base_price, subscription_status, pro_percent)
    return PricingQuote(
        base_price=base_price,
        discount_percent=discount_percent,
        final_amount=final_amount,
        tier_label=tier.label if tier else None,
        lot_price_estimate=_storable_estimate(lot_price),
    )


def compute_deposit_quote(
    listing: Any,
    deposit_percent: Any,
    subscription_status: Any,
    pro_percent: float,
    default_percent: float = 10,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> PricingQuote:
    lot_price = estimate_lot_price(listing, max_depth)
    deposit_raw = estimate_deposit(listing, max_depth)
    deposit_amount = round_half_up(deposit_raw) if deposit_raw is not None else 0
    percent = normalize_deposit_percent(deposit_percent, default_percent) or 0.0

    base_price = round_half_up(deposit_amount * percent / 100)
    discount_percent, final_amount = apply_discount(base_price, subscription_status, pro_percent)
    return PricingQuote(
        base_price=base_price,
        discount_percent=discount_percent,
        final_amount=final_amount,
        tier_label=f"Задаток + {format_percent_label(percent)}",
        lot_price_estimate=_storable_estimate(lot_price),
        deposit_amount=deposit_amount,
        deposit_percent=percent,
    )
