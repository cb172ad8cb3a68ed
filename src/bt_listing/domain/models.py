"""Domain models for bt_listing: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.bt_common.enums import ListingRefKind


@dataclass(frozen=True)
class ListingRef:
    """Listing identifier as accepted from clients.

    INTERNAL values are canonical decimal strings (no leading zeros) so ids
    beyond 2**53 keep their precision; EXTERNAL values are parser source ids.
    """

    kind: ListingRefKind
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class Listing:
    id: int
    title: str
    source_id: str | None = None
    region: str | None = None
    asset_type: str | None = None
    currency: str | None = None
    # Price columns as stored by ingestion; any of them may be NULL
    start_price: Any = None
    current_price: Any = None
    min_price: Any = None
    max_price: Any = None
    price: Any = None
    amount: Any = None
    lot_price: Any = None
    end_date: datetime | None = None
    source_url: str | None = None
    details: Any = field(default_factory=dict)  # free-form JSON document
