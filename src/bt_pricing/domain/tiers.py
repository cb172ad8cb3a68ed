"""Flat-fee price tiers: normalization of admin-managed rows and resolution.

Effective tier lists always end with exactly one unbounded (catch-all) tier and
are ordered by (sort_order, ceiling, amount).
"""

import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from src.bt_common.money import parse_money_like, round_half_up
from src.bt_pricing.domain.models import PriceTier


def _normalize_sort_order(value: Any, fallback: float) -> float:
    if value is None or isinstance(value, bool):
        return fallback
    try:
        number = float(str(value).strip())
    except ValueError:
        return fallback
    return number if math.isfinite(number) else fallback


def normalize_tier(row: Mapping[str, Any] | None, fallback_sort: float = 0) -> PriceTier | None:
    """Build a PriceTier from a loosely-typed row; None when the row is unusable."""
    if not row:
        return None
    label = str(row.get("label") or "").strip()
    if not label:
        return None
    amount = parse_money_like(row.get("amount"))
    if amount is None or amount < 0:
        return None
    max_raw = parse_money_like(row.get("max_amount"))
    return PriceTier(
        label=label,
        amount=round_half_up(amount),
        max_amount=round_half_up(max_raw) if max_raw is not None and max_raw > 0 else None,
        sort_order=_normalize_sort_order(row.get("sort_order"), fallback_sort),
        id=row.get("id"),
    )


def _sort_key(tier: PriceTier) -> tuple[float, float, int]:
    return (tier.sort_order, tier.ceiling, tier.amount)


def sort_tiers(tiers: Iterable[PriceTier | None]) -> list[PriceTier]:
    """Drop duplicates (same sort order, ceiling and label) and sort."""
    unique: dict[tuple[float, float, str], PriceTier] = {}
    for tier in tiers:
        if tier is None:
            continue
        unique.setdefault((tier.sort_order, tier.ceiling, tier.label), tier)
    return sorted(unique.values(), key=_sort_key)


def ensure_fallback_tier(
    tiers: Sequence[PriceTier], defaults: Sequence[PriceTier]
) -> list[PriceTier]:
    """Append the default catch-all tier when no unbounded tier is configured."""
    if any(t.is_unbounded for t in tiers):
        return list(tiers)
    fallback = next((t for t in defaults if t.is_unbounded), None)
    if fallback is None:
        return list(tiers)
    max_sort = max((t.sort_order for t in tiers), default=0)
    return [*tiers, PriceTier(fallback.label, fallback.amount, None, max(max_sort, 0) + 10)]


def effective_tiers(
    rows: Sequence[Mapping[str, Any]], defaults: Sequence[PriceTier]
) -> list[PriceTier]:
    """Tiers actually used for pricing: DB rows if any are valid, else defaults."""
    normalized = [
        t for t in (normalize_tier(row, (i + 1) * 10) for i, row in enumerate(rows)) if t
    ]
    if not normalized:
        return sort_tiers(defaults)
    return sort_tiers(ensure_fallback_tier(normalized, defaults))


def resolve_tier(tiers: Sequence[PriceTier], lot_price: float | None) -> PriceTier | None:
    """Pick the tier for an estimated lot price.

    Tiers are scanned by ceiling ascending (stable, so equal ceilings keep their
    sort order) and the first ceiling >= price wins. An unknown price maps to
    the second tier rather than the cheapest; with a single tier, that tier.
    """
    ordered = sorted(tiers, key=lambda t: t.ceiling)
    if not ordered:
        return None
    if lot_price is None:
        return ordered[1] if len(ordered) > 1 else ordered[0]
    for tier in ordered:
        if lot_price <= tier.ceiling:
            return tier
    return ordered[-1]
