"""bt_pricing REST API: public pricing + quote, admin tier/settings management."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.bt_common.database import get_db_session
from src.bt_common.enums import OrderKind
from src.bt_common.response import ApiResponse, success_response
from src.bt_gateway.auth.dependencies import get_current_user, require_admin
from src.bt_gateway.user.db_models import UserModel
from src.bt_pricing.application.schemas import DepositPercentRequest, TierRequest
from src.bt_pricing.application.service import PricingApplicationService

router = APIRouter(prefix="/trade-pricing", tags=["pricing"])
admin_router = APIRouter(prefix="/admin/trade-pricing", tags=["admin-pricing"])

_service = PricingApplicationService()


@router.get("")
async def get_pricing(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_public_pricing(db)
    return success_response(data.model_dump(), request)


@router.get("/quote")
async def get_quote(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    listing_id: str | None = Query(None, alias="listingId"),
    kind: OrderKind = Query(OrderKind.TRADE_ORDER, description="inspections | trade_orders"),
) -> ApiResponse:
    data = await _service.quote_for_listing(
        db, listing_id, current_user.subscription_status, kind
    )
    return success_response(data.model_dump(), request)


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


@admin_router.get("")
async def get_admin_pricing(
    _admin: Annotated[UserModel, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_admin_pricing(db)
    return success_response(data.model_dump(), request)


@admin_router.put("")
async def update_pricing_settings(
    body: DepositPercentRequest,
    _admin: Annotated[UserModel, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.update_deposit_percent(db, body.deposit_percent)
    return success_response({"settings": data.model_dump()}, request)


@admin_router.post("/tiers")
async def create_tier(
    body: TierRequest,
    _admin: Annotated[UserModel, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_tier(db, body)
    return success_response({"item": data.model_dump()}, request)


@admin_router.put("/tiers/{tier_id}")
async def update_tier(
    tier_id: int,
    body: TierRequest,
    _admin: Annotated[UserModel, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.update_tier(db, tier_id, body)
    return success_response({"item": data.model_dump()}, request)


@admin_router.delete("/tiers/{tier_id}")
async def delete_tier(
    tier_id: int,
    _admin: Annotated[UserModel, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    await _service.delete_tier(db, tier_id)
    return success_response({"ok": True}, request)
