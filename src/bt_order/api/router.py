"""bt_order REST API: paid inspections and trade orders for the current user."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.bt_common.database import get_db_session
from src.bt_common.enums import OrderKind
from src.bt_common.response import ApiResponse, success_response
from src.bt_gateway.auth.dependencies import get_current_user
from src.bt_gateway.middleware.rate_limit import enforce_order_rate_limit
from src.bt_gateway.user.db_models import UserModel
from src.bt_order.application.schemas import CreateOrderRequest
from src.bt_order.application.service import OrderApplicationService

inspections_router = APIRouter(prefix="/inspections", tags=["inspections"])
trade_orders_router = APIRouter(prefix="/trade-orders", tags=["trade-orders"])

_service = OrderApplicationService()


def mark_viewed_flag(
    mark_viewed: bool = Query(False, description="Stamp all own orders as viewed"),
    mark_viewed_camel: bool = Query(False, alias="markViewed", include_in_schema=False),
) -> bool:
    """Accepts both `mark_viewed` and the web client's `markViewed`."""
    return mark_viewed or mark_viewed_camel


# ---------------------------------------------------------------------------
# Inspections
# ---------------------------------------------------------------------------


@inspections_router.post("")
async def create_inspection(
    body: CreateOrderRequest,
    current_user: Annotated[UserModel, Depends(enforce_order_rate_limit)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.issue_order(
        db, str(current_user.id), body.listing_id, OrderKind.INSPECTION
    )
    return success_response(data.model_dump(), request)


@inspections_router.get("/me")
async def list_my_inspections(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    mark_viewed: Annotated[bool, Depends(mark_viewed_flag)],
    status: str | None = Query(None),
) -> ApiResponse:
    data = await _service.list_my_orders(
        db, OrderKind.INSPECTION, str(current_user.id), status, mark_viewed
    )
    return success_response(data.model_dump(), request)


@inspections_router.get("/statuses")
async def list_inspection_statuses(
    _user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.list_statuses(db, OrderKind.INSPECTION)
    return success_response(data.model_dump(), request)


# ---------------------------------------------------------------------------
# Trade orders
# ---------------------------------------------------------------------------


@trade_orders_router.post("")
async def create_trade_order(
    body: CreateOrderRequest,
    current_user: Annotated[UserModel, Depends(enforce_order_rate_limit)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.issue_order(
        db, str(current_user.id), body.listing_id, OrderKind.TRADE_ORDER
    )
    return success_response(data.model_dump(), request)


@trade_orders_router.get("/me")
async def list_my_trade_orders(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    mark_viewed: Annotated[bool, Depends(mark_viewed_flag)],
    status: str | None = Query(None, description="Filter by exact status label"),
) -> ApiResponse:
    data = await _service.list_my_orders(
        db, OrderKind.TRADE_ORDER, str(current_user.id), status, mark_viewed
    )
    return success_response(data.model_dump(), request)


@trade_orders_router.get("/unread-count")
async def count_unread_trade_orders(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.count_my_unread(db, OrderKind.TRADE_ORDER, str(current_user.id))
    return success_response(data.model_dump(), request)


@trade_orders_router.get("/statuses")
async def list_trade_order_statuses(
    _user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.list_statuses(db, OrderKind.TRADE_ORDER)
    return success_response(data.model_dump(), request)
