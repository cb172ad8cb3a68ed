"""Tests for lot price / deposit estimation over listing columns and details."""

from typing import Any

from src.bt_pricing.domain.estimator import (
    LOT_PRICE_DETAIL_KEYS,
    collect_detail_candidates,
    estimate_deposit,
    estimate_lot_price,
    find_first_positive,
)
from tests.conftest import make_listing


def _nested(depth: int, leaf: dict[str, Any]) -> dict[str, Any]:
    node = leaf
    for _ in range(depth):
        node = {"inner": node}
    return node


class TestEstimateLotPrice:
    def test_current_price_has_priority(self) -> None:
        listing = make_listing(current_price=300_000, start_price=450_000)
        assert estimate_lot_price(listing) == 300_000

    def test_skips_missing_and_non_positive_columns(self) -> None:
        listing = make_listing(current_price=0, start_price="450 000")
        assert estimate_lot_price(listing) == 450_000

    def test_columns_win_over_details(self) -> None:
        listing = make_listing(price=100, details={"price": 999})
        assert estimate_lot_price(listing) == 100

    def test_nested_details(self) -> None:
        listing = make_listing(details={"lot": {"startPrice": "1 200 000,00 ₽"}})
        assert estimate_lot_price(listing) == 1_200_000

    def test_details_inside_lists(self) -> None:
        listing = make_listing(details={"schedule": [{"note": "x"}, {"price": "75 000"}]})
        assert estimate_lot_price(listing) == 75_000

    def test_unknown_price(self) -> None:
        listing = make_listing(details={"debtor": {"name": "ООО Ромашка"}, "price": "договорная"})
        assert estimate_lot_price(listing) is None

    def test_accepts_plain_mapping(self) -> None:
        assert estimate_lot_price({"price": "15 000", "details": None}) == 15_000

    def test_none_listing(self) -> None:
        assert estimate_lot_price(None) is None


class TestDetailWalk:
    def test_cycles_terminate(self) -> None:
        details: dict[str, Any] = {"price": 5}
        details["self"] = details
        details["children"] = [details, {"parent": details}]
        assert collect_detail_candidates(details, LOT_PRICE_DETAIL_KEYS) == [5]

    def test_depth_bound(self) -> None:
        details = _nested(40, {"price": 777})
        assert collect_detail_candidates(details, LOT_PRICE_DETAIL_KEYS, max_depth=32) == []
        assert collect_detail_candidates(details, LOT_PRICE_DETAIL_KEYS, max_depth=64) == [777]

    def test_non_container_details(self) -> None:
        assert collect_detail_candidates("price: 100", LOT_PRICE_DETAIL_KEYS) == []
        assert collect_detail_candidates(None, LOT_PRICE_DETAIL_KEYS) == []

    def test_find_first_positive(self) -> None:
        assert find_first_positive([None, "abc", -3, 0, "12,5"]) == 12.5
        assert find_first_positive([]) is None


class TestEstimateDeposit:
    def test_deposit_from_details(self) -> None:
        listing = make_listing(details={"lot": {"deposit_amount": "45 000"}})
        assert estimate_deposit(listing) == 45_000

    def test_deposit_unknown(self) -> None:
        assert estimate_deposit(make_listing(price=100_000)) is None
