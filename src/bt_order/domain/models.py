"""Order domain model: pure dataclass, no SQLAlchemy dependency.

Inspections and trade orders share one shape; ``kind`` tells which table
the row lives in.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.bt_common.enums import OrderKind


@dataclass
class ServiceOrder:
    kind: OrderKind
    id: int
    user_id: str
    listing_id: int
    status: str
    # Priced once at creation; never recomputed on status changes
    base_price: Decimal
    discount_percent: Decimal
    final_amount: Decimal
    service_tier: str | None = None
    lot_price_estimate: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user_last_viewed_at: datetime | None = None
    admin_last_viewed_at: datetime | None = None
    # Joined for list/detail views
    listing_title: str | None = None
    user_name: str | None = None
    user_phone: str | None = None

    @staticmethod
    def _unread(last_viewed_at: datetime | None, updated_at: datetime | None) -> bool:
        if last_viewed_at is None:
            return True
        return updated_at is not None and last_viewed_at < updated_at

    @property
    def user_unread(self) -> bool:
        return self._unread(self.user_last_viewed_at, self.updated_at)

    @property
    def admin_unread(self) -> bool:
        return self._unread(self.admin_last_viewed_at, self.updated_at)


@dataclass(frozen=True)
class UserSnapshot:
    """Balance-relevant fields of a users row, read under FOR UPDATE."""

    id: str
    balance: Decimal
    subscription_status: str
    balance_frozen: bool
