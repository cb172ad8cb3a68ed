"""Pydantic schemas for bt_order API."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from src.bt_order.domain.models import ServiceOrder

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreateOrderRequest(BaseModel):
    # Raw value: JSON number or string, resolved by parse_listing_ref
    listing_id: Any = Field(None, validation_alias=AliasChoices("listingId", "listing_id"))


class StatusUpdateRequest(BaseModel):
    status: Any = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class OrderOut(BaseModel):
    id: int
    kind: str
    user_id: str
    listing_id: int
    listing_title: str | None
    status: str
    base_price: float
    discount_percent: float
    final_amount: float
    service_tier: str | None
    lot_price_estimate: int | None
    created_at: datetime | None
    updated_at: datetime | None
    user_unread: bool
    admin_unread: bool
    user_name: str | None = None
    user_phone: str | None = None

    @classmethod
    def from_domain(cls, order: ServiceOrder) -> "OrderOut":
        return cls(
            id=order.id,
            kind=order.kind.value,
            user_id=order.user_id,
            listing_id=order.listing_id,
            listing_title=order.listing_title,
            status=order.status,
            base_price=float(order.base_price),
            discount_percent=float(order.discount_percent),
            final_amount=float(order.final_amount),
            service_tier=order.service_tier,
            lot_price_estimate=order.lot_price_estimate,
            created_at=order.created_at,
            updated_at=order.updated_at,
            user_unread=order.user_unread,
            admin_unread=order.admin_unread,
            user_name=order.user_name,
            user_phone=order.user_phone,
        )


class CreateOrderResponse(BaseModel):
    ok: bool = True
    order: OrderOut


class OrderListResponse(BaseModel):
    items: list[OrderOut]


class UnreadCountResponse(BaseModel):
    count: int


class StatusListResponse(BaseModel):
    statuses: list[str]
