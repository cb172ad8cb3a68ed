"""Money helpers for loosely-typed price data.

Listing prices arrive from third-party parsers as numbers, localized strings
("1 250 000,50 ₽"), booleans or nothing at all. Everything here is total:
bad input yields None, never an exception.
Amounts are rubles; balances are stored as NUMERIC(14,2).
"""

import math
import re
from decimal import Decimal
from typing import Any

_WHITESPACE_RE = re.compile(r"[\s\u00a0]+")
_NON_NUMERIC_RE = re.compile(r"[^0-9.+\-]")
_NBSP = "\u00a0"

# PostgreSQL BIGINT upper bound
BIGINT_MAX = 2**63 - 1


def parse_money_like(value: Any) -> float | None:
    """Parse a price-like value into a finite float, or None.

    - None -> None; bool -> 1.0 / 0.0
    - int / float / Decimal -> float when finite
    - anything else is stringified: whitespace (incl. NBSP) removed, ',' read
      as the decimal separator, every char except digits, '.', '+', '-' dropped.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float, Decimal)):
        try:
            number = float(value)
        except (OverflowError, ValueError):
            return None
        return number if math.isfinite(number) else None

    text = _WHITESPACE_RE.sub("", str(value))
    cleaned = _NON_NUMERIC_RE.sub("", text.replace(",", "."))
    if not cleaned:
        return None
    try:
        number = float(cleaned)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 toward +inf."""
    return math.floor(value + 0.5)


def format_rub(amount: float | int | Decimal) -> str:
    """Format an amount in ru-RU style: 1234567 -> '1 234 567 ₽', 1234.5 -> '1 234,50 ₽'.

    The output parses back to the same amount through parse_money_like.
    """
    quantized = Decimal(str(amount)).quantize(Decimal("0.01"))
    sign = "-" if quantized < 0 else ""
    whole, _, frac = f"{abs(quantized):f}".partition(".")
    grouped = f"{int(whole):,}".replace(",", _NBSP)
    if frac.strip("0"):
        return f"{sign}{grouped},{frac} ₽"
    return f"{sign}{grouped} ₽"
