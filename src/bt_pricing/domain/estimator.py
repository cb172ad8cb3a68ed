"""Best-effort lot price / deposit discovery.

Source parsers disagree on key names, so the estimate is a fixed-priority scan:
direct listing columns first, then every value stored under a known key
anywhere inside the ``details`` JSON document. The first value that normalizes
to a positive number wins.
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from src.bt_common.money import parse_money_like

LOT_PRICE_FIELDS: tuple[str, ...] = (
    "current_price",
    "start_price",
    "min_price",
    "max_price",
    "price",
    "amount",
    "lot_price",
)

LOT_PRICE_DETAIL_KEYS: frozenset[str] = frozenset({
    "current_price", "currentPrice", "current_price_number",
    "start_price", "startPrice", "starting_price", "startingPrice",
    "min_price", "minPrice", "minimal_price", "minimalPrice",
    "max_price", "maxPrice", "maximum_price", "maximumPrice",
    "price", "amount", "value", "sum", "lot_price", "lotPrice",
    "assessment_price", "appraised_price", "appraised_value",
})

DEPOSIT_FIELDS: tuple[str, ...] = (
    "deposit",
    "deposit_amount",
    "depositAmount",
    "guarantee_deposit",
    "guaranteeDeposit",
    "guarantee_deposit_amount",
    "guaranteeDepositAmount",
)

DEPOSIT_DETAIL_KEYS: frozenset[str] = frozenset(DEPOSIT_FIELDS)

DEFAULT_MAX_DEPTH = 32


def _children(node: Any) -> Iterator[tuple[str | None, Any]]:
    """(key, value) pairs of a container node; sequence items have no key."""
    if isinstance(node, Mapping):
        for key, value in node.items():
            yield str(key), value
    elif isinstance(node, Sequence) and not isinstance(node, (str, bytes, bytearray)):
        for value in node:
            yield None, value


def _is_container(value: Any) -> bool:
    return isinstance(value, Mapping) or (
        isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))
    )


def collect_detail_candidates(
    details: Any,
    keys: frozenset[str],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[Any]:
    """Collect values stored under ``keys`` anywhere in a JSON-like tree.

    Iterative depth-first walk. Containers are visited at most once (by
    identity) and nothing deeper than ``max_depth`` levels is expanded, so
    shared or cyclic references cannot loop.
    """
    if not _is_container(details):
        return []

    candidates: list[Any] = []
    seen: set[int] = set()
    stack: list[tuple[Any, int]] = [(details, 0)]

    while stack:
        node, depth = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))

        for key, value in _children(node):
            if _is_container(value) and depth < max_depth:
                stack.append((value, depth + 1))
            if key is not None and key in keys:
                candidates.append(value)
    return candidates


def find_first_positive(values: Iterable[Any]) -> float | None:
    for value in values:
        number = parse_money_like(value)
        if number is not None and number > 0:
            return number
    return None


def _estimate(
    listing: Any,
    fields: Sequence[str],
    detail_keys: frozenset[str],
    max_depth: int,
) -> float | None:
    if listing is None:
        return None
    if isinstance(listing, Mapping):
        direct = [listing.get(f) for f in fields]
        details = listing.get("details")
    else:
        direct = [getattr(listing, f, None) for f in fields]
        details = getattr(listing, "details", None)
    candidates = [v for v in direct if v is not None]
    candidates.extend(collect_detail_candidates(details, detail_keys, max_depth))
    return find_first_positive(candidates)


def estimate_lot_price(listing: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> float | None:
    """Estimated lot price of a Listing (or listing-shaped mapping), None if unknown."""
    return _estimate(listing, LOT_PRICE_FIELDS, LOT_PRICE_DETAIL_KEYS, max_depth)


def estimate_deposit(listing: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> float | None:
    """Deposit (задаток) amount of a listing, None if unknown."""
    return _estimate(listing, DEPOSIT_FIELDS, DEPOSIT_DETAIL_KEYS, max_depth)
