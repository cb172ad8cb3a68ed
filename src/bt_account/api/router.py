"""bt_account REST API: own balance + admin balance freeze."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.bt_account.application.schemas import FreezeBalanceRequest, TopUpRequest
from src.bt_account.application.service import AccountApplicationService
from src.bt_common.database import get_db_session
from src.bt_common.response import ApiResponse, success_response
from src.bt_gateway.auth.dependencies import get_current_user, require_admin
from src.bt_gateway.user.db_models import UserModel

router = APIRouter(prefix="/me", tags=["account"])
admin_router = APIRouter(prefix="/admin/users", tags=["admin-users"])

_service = AccountApplicationService()


@router.get("/balance")
async def get_balance(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_balance(db, str(current_user.id))
    return success_response(data.model_dump(), request)


@router.post("/balance-add")
async def add_balance(
    body: TopUpRequest,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.top_up(db, str(current_user.id), body.amount)
    return success_response(data.model_dump(), request)


@admin_router.post("/{user_id}/freeze-balance")
async def freeze_balance(
    user_id: str,
    body: FreezeBalanceRequest,
    _admin: Annotated[UserModel, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.set_balance_frozen(db, user_id, body.freeze)
    return success_response(data.model_dump(), request)
