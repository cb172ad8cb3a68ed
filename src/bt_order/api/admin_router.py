"""bt_order admin REST API: order queues and status workflow, admin role only."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.bt_common.database import get_db_session
from src.bt_common.enums import OrderKind
from src.bt_common.response import ApiResponse, success_response
from src.bt_gateway.auth.dependencies import require_admin
from src.bt_gateway.user.db_models import UserModel
from src.bt_order.application.schemas import StatusUpdateRequest
from src.bt_order.application.service import OrderApplicationService

admin_inspections_router = APIRouter(prefix="/admin/inspections", tags=["admin-inspections"])
admin_trade_orders_router = APIRouter(prefix="/admin/trade-orders", tags=["admin-trade-orders"])

_service = OrderApplicationService()

AdminUser = Annotated[UserModel, Depends(require_admin)]
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


# ---------------------------------------------------------------------------
# Inspections
# ---------------------------------------------------------------------------


@admin_inspections_router.get("")
async def list_inspections(
    _admin: AdminUser,
    db: DbSession,
    request: Request,
    status: str | None = Query(None),
) -> ApiResponse:
    data = await _service.admin_list(db, OrderKind.INSPECTION, status)
    return success_response(data.model_dump(), request)


@admin_inspections_router.get("/{order_id}")
async def get_inspection(
    order_id: str, _admin: AdminUser, db: DbSession, request: Request
) -> ApiResponse:
    data = await _service.admin_get(db, OrderKind.INSPECTION, order_id)
    return success_response(data.model_dump(), request)


@admin_inspections_router.put("/{order_id}/status")
async def update_inspection_status(
    order_id: str,
    body: StatusUpdateRequest,
    _admin: AdminUser,
    db: DbSession,
    request: Request,
) -> ApiResponse:
    data = await _service.admin_update_status(db, OrderKind.INSPECTION, order_id, body.status)
    return success_response(data.model_dump(), request)


# ---------------------------------------------------------------------------
# Trade orders
# ---------------------------------------------------------------------------


@admin_trade_orders_router.get("")
async def list_trade_orders(
    _admin: AdminUser,
    db: DbSession,
    request: Request,
    status: str | None = Query(None, description="Filter by exact status label"),
) -> ApiResponse:
    data = await _service.admin_list(db, OrderKind.TRADE_ORDER, status)
    return success_response(data.model_dump(), request)


@admin_trade_orders_router.get("/unread-count")
async def count_unread_trade_orders(
    _admin: AdminUser, db: DbSession, request: Request
) -> ApiResponse:
    data = await _service.admin_count_unread(db, OrderKind.TRADE_ORDER)
    return success_response(data.model_dump(), request)


@admin_trade_orders_router.get("/statuses")
async def list_trade_order_statuses(
    _admin: AdminUser, db: DbSession, request: Request
) -> ApiResponse:
    data = await _service.list_statuses(db, OrderKind.TRADE_ORDER)
    return success_response(data.model_dump(), request)


@admin_trade_orders_router.get("/{order_id}")
async def get_trade_order(
    order_id: str, _admin: AdminUser, db: DbSession, request: Request
) -> ApiResponse:
    data = await _service.admin_get(db, OrderKind.TRADE_ORDER, order_id)
    return success_response(data.model_dump(), request)


@admin_trade_orders_router.put("/{order_id}/status")
async def update_trade_order_status(
    order_id: str,
    body: StatusUpdateRequest,
    _admin: AdminUser,
    db: DbSession,
    request: Request,
) -> ApiResponse:
    data = await _service.admin_update_status(db, OrderKind.TRADE_ORDER, order_id, body.status)
    return success_response(data.model_dump(), request)
