"""Tests for order status labels and admin input matching."""

import pytest

from src.bt_common.enums import OrderKind
from src.bt_common.errors import InvalidStatusError
from src.bt_order.domain.statuses import (
    INITIAL_STATUS,
    INSPECTION_DONE,
    INSPECTION_IN_PROGRESS,
    INSPECTION_MODERATION,
    normalize_status_text,
    resolve_inspection_status,
    validate_status_label,
)


def test_initial_statuses() -> None:
    assert INITIAL_STATUS[OrderKind.INSPECTION] == "Идет модерация"
    assert INITIAL_STATUS[OrderKind.TRADE_ORDER] == "Оплачен/Ожидание модерации"


def test_normalize_status_text() -> None:
    assert normalize_status_text("  Идёт   МОДЕРАЦИЯ! ") == "идет модерация"
    assert normalize_status_text(None) == ""


class TestResolveInspectionStatus:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Идет модерация", INSPECTION_MODERATION),
            ("идёт модерация.", INSPECTION_MODERATION),
            ("Выполняется осмотр машины", INSPECTION_IN_PROGRESS),
            ("Завершен", INSPECTION_DONE),
            ("ЗАВЕРШЁН", INSPECTION_DONE),
        ],
    )
    def test_exact_after_normalization(self, raw: str, expected: str) -> None:
        assert resolve_inspection_status(raw) == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Оплачен/Ожидание модерации", INSPECTION_MODERATION),
            ("Заказ принят, приступаем к осмотру", INSPECTION_IN_PROGRESS),
            ("Осмотр завершён", INSPECTION_DONE),
            ("готово", INSPECTION_DONE),
        ],
    )
    def test_known_phrases(self, raw: str, expected: str) -> None:
        assert resolve_inspection_status(raw) == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("на модерации", INSPECTION_MODERATION),
            ("производим осмотр авто", INSPECTION_IN_PROGRESS),
            ("работы завершены", INSPECTION_DONE),
        ],
    )
    def test_stage_keywords(self, raw: str, expected: str) -> None:
        assert resolve_inspection_status(raw) == expected

    def test_no_match_lists_allowed(self) -> None:
        with pytest.raises(InvalidStatusError) as exc_info:
            resolve_inspection_status("отменен")
        assert "Идет модерация" in exc_info.value.message

    @pytest.mark.parametrize("raw", [None, 5, "", "   "])
    def test_blank_or_non_string(self, raw: object) -> None:
        with pytest.raises(InvalidStatusError):
            resolve_inspection_status(raw)


class TestValidateStatusLabel:
    def test_trimmed(self) -> None:
        assert validate_status_label("  Торги перенесены ") == "Торги перенесены"

    def test_not_a_string(self) -> None:
        with pytest.raises(InvalidStatusError) as exc_info:
            validate_status_label(123)
        assert exc_info.value.error == "BAD_STATUS_TYPE"

    def test_empty(self) -> None:
        with pytest.raises(InvalidStatusError) as exc_info:
            validate_status_label("   ")
        assert exc_info.value.error == "EMPTY_STATUS"

    def test_too_long(self) -> None:
        assert validate_status_label("я" * 200) == "я" * 200
        with pytest.raises(InvalidStatusError) as exc_info:
            validate_status_label("я" * 201)
        assert exc_info.value.error == "STATUS_TOO_LONG"
