"""Order status labels and admin input matching.

Inspection statuses are a closed list; free-form admin input is mapped onto
it by normalized text, then by stage keywords. Trade order statuses are an
open catalog (table trade_order_statuses); any non-empty label up to
STATUS_MAX_LENGTH characters is accepted.
"""

import re
from typing import Any

from src.bt_common.enums import OrderKind
from src.bt_common.errors import InvalidStatusError

STATUS_MAX_LENGTH = 200

INSPECTION_MODERATION = "Идет модерация"
INSPECTION_IN_PROGRESS = "Выполняется осмотр машины"
INSPECTION_DONE = "Завершен"

INSPECTION_STATUSES: tuple[str, ...] = (
    INSPECTION_MODERATION,
    INSPECTION_IN_PROGRESS,
    INSPECTION_DONE,
)

TRADE_ORDER_STATUSES: tuple[str, ...] = (
    "Оплачен/Ожидание модерации",
    "Заявка подтверждена",
    "Подготовка к торгам",
    "Торги завершены",
)

INITIAL_STATUS: dict[OrderKind, str] = {
    OrderKind.INSPECTION: INSPECTION_MODERATION,
    OrderKind.TRADE_ORDER: TRADE_ORDER_STATUSES[0],
}

_PUNCTUATION_RE = re.compile(r"[.,;:!?()\"'«»]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_status_text(value: Any) -> str:
    """'  Идёт   модерация! ' -> 'идет модерация'."""
    text = str(value or "").strip().lower().replace("ё", "е")
    text = _PUNCTUATION_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


# Phrases admins actually type, mapped to the canonical label
_INSPECTION_ALIASES: dict[str, str] = {
    normalize_status_text(phrase): label
    for phrase, label in (
        ("Оплачен/Ожидание модерации", INSPECTION_MODERATION),
        ("Идет модерация", INSPECTION_MODERATION),
        ("Заказ принят, приступаем к осмотру", INSPECTION_IN_PROGRESS),
        ("Заказ принят", INSPECTION_IN_PROGRESS),
        ("Приступаем к осмотру", INSPECTION_IN_PROGRESS),
        ("Производится осмотр", INSPECTION_IN_PROGRESS),
        ("Выполняется осмотр", INSPECTION_IN_PROGRESS),
        ("Идет осмотр", INSPECTION_IN_PROGRESS),
        ("Осмотр завершен", INSPECTION_DONE),
        ("Готово", INSPECTION_DONE),
    )
}

# Checked in this order: "осмотр завершен" is caught by the alias table first
_INSPECTION_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("принят", "приступ", "осмотр", "выполня", "производ"), INSPECTION_IN_PROGRESS),
    (("модерац", "ожидан", "оплач"), INSPECTION_MODERATION),
    (("заверш", "готово"), INSPECTION_DONE),
)


def resolve_inspection_status(raw: Any) -> str:
    """Map admin input onto one of INSPECTION_STATUSES.

    Raises:
        InvalidStatusError: input is not a string, is blank, or matches nothing.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidStatusError("Status must be a non-empty string")

    text = normalize_status_text(raw)
    for label in INSPECTION_STATUSES:
        if normalize_status_text(label) == text:
            return label

    if text in _INSPECTION_ALIASES:
        return _INSPECTION_ALIASES[text]
    for phrase, label in _INSPECTION_ALIASES.items():
        if phrase in text:
            return label

    for keywords, label in _INSPECTION_KEYWORDS:
        if any(kw in text for kw in keywords):
            return label

    raise InvalidStatusError(
        f"Unknown inspection status, allowed: {', '.join(INSPECTION_STATUSES)}"
    )


def validate_status_label(raw: Any) -> str:
    """Validate a free-form trade order status; returns the trimmed label."""
    if not isinstance(raw, str):
        raise InvalidStatusError("Status must be a string", "BAD_STATUS_TYPE")
    value = raw.strip()
    if not value:
        raise InvalidStatusError("Status must not be empty", "EMPTY_STATUS")
    if len(value) > STATUS_MAX_LENGTH:
        raise InvalidStatusError(
            f"Status must be at most {STATUS_MAX_LENGTH} characters", "STATUS_TOO_LONG"
        )
    return value
