"""FastAPI dependencies: get_current_user, require_admin.

Usage in any protected router:
    from src.bt_gateway.auth.dependencies import get_current_user

    @router.get("/protected")
    async def protected(user: Annotated[UserModel, Depends(get_current_user)]):
        ...
"""

import uuid
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.bt_common.database import get_db_session
from src.bt_common.enums import UserRole
from src.bt_common.errors import (
    AccountBlockedError,
    AdminRequiredError,
    UnauthorizedError,
    UserNotFoundError,
)
from src.bt_gateway.auth.jwt_handler import decode_token
from src.bt_gateway.user.db_models import UserModel

# auto_error=False so a missing header renders through the AppError envelope
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> UserModel:
    """Validate the bearer token and load the user.

    Raises UnauthorizedError (401) when the token is missing or invalid,
    UserNotFoundError (404) when its user no longer exists and
    AccountBlockedError (403) when the user is blocked.
    """
    if credentials is None:
        raise UnauthorizedError()
    payload = decode_token(credentials.credentials)

    try:
        user_id = uuid.UUID(str(payload["sub"]))
    except ValueError:
        raise UnauthorizedError() from None

    result = await db.execute(select(UserModel).where(UserModel.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise UserNotFoundError(str(user_id))
    if user.is_blocked:
        raise AccountBlockedError()
    return user


async def require_admin(
    current_user: Annotated[UserModel, Depends(get_current_user)],
) -> UserModel:
    """Role is read from the users row, not from the token claim."""
    if current_user.role != UserRole.ADMIN.value:
        raise AdminRequiredError()
    return current_user
