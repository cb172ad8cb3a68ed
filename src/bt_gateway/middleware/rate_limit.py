"""Per-user rate limit on order creation.

Fixed one-minute window in Redis:
    count = INCR ratelimit:{user_id}:orders
    EXPIRE on first hit
    count > limit -> RateLimitError (9001, HTTP 429)

Redis being unreachable must not block paid orders, so connection errors
are logged and the request is let through.
"""

import logging
from typing import Annotated

from fastapi import Depends
from redis.exceptions import RedisError

from config.settings import settings
from src.bt_common.errors import RateLimitError
from src.bt_common.redis_client import get_redis
from src.bt_gateway.auth.dependencies import get_current_user
from src.bt_gateway.user.db_models import UserModel

logger = logging.getLogger(__name__)

_WINDOW_SECONDS = 60


def _key(user_id: str) -> str:
    return f"ratelimit:{user_id}:orders"


async def enforce_order_rate_limit(
    current_user: Annotated[UserModel, Depends(get_current_user)],
) -> UserModel:
    limit = settings.ORDER_RATE_LIMIT_PER_MINUTE
    if limit <= 0:
        return current_user

    key = _key(str(current_user.id))
    try:
        redis = await get_redis()
        count = await redis.incr(key)
        if count == 1:
            await redis.expire(key, _WINDOW_SECONDS)
    except RedisError:
        logger.warning("Rate limiter unavailable, letting order through", exc_info=True)
        return current_user

    if count > limit:
        logger.info("Order rate limit hit for user %s (%d/%d)", current_user.id, count, limit)
        raise RateLimitError()
    return current_user
