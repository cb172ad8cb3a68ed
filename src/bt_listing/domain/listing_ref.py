"""Listing id normalization, done once at the API boundary.

Clients send either the internal numeric id (as a JSON number or a digit
string, possibly zero-padded) or the external source id produced by the parser.
"""

import math
import re
from typing import Any

from src.bt_common.enums import ListingRefKind
from src.bt_listing.domain.models import ListingRef

DEFAULT_MAX_LENGTH = 160

_WHITESPACE_RE = re.compile(r"\s+")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_DIGITS_RE = re.compile(r"[0-9]+")


def parse_listing_ref(value: Any, max_length: int = DEFAULT_MAX_LENGTH) -> ListingRef | None:
    """Return a ListingRef, or None when the value cannot identify a listing."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return ListingRef(ListingRefKind.INTERNAL, str(value)) if value > 0 else None

    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        truncated = math.trunc(value)
        return ListingRef(ListingRefKind.INTERNAL, str(truncated)) if truncated > 0 else None

    compact = _CONTROL_RE.sub("", _WHITESPACE_RE.sub("", str(value)))
    if not compact:
        return None

    if _DIGITS_RE.fullmatch(compact):
        digits = compact.lstrip("0")
        if not digits:
            return None
        return ListingRef(ListingRefKind.INTERNAL, str(int(digits)))

    return ListingRef(ListingRefKind.EXTERNAL, compact[:max_length])
