"""Lazily created redis.asyncio client backing the order rate limiter.

Only rate-limit counters live here (``ratelimit:<user_id>:orders``). Balances
and orders are PostgreSQL-only, so an unreachable Redis degrades to "no
rate limiting" and never blocks an order.
"""

import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from config.settings import settings

logger = logging.getLogger(__name__)

_client: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    global _client  # noqa: PLW0603
    if _client is None:
        _client = aioredis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=settings.REDIS_TIMEOUT_SECONDS,
            socket_timeout=settings.REDIS_TIMEOUT_SECONDS,
        )
    return _client


async def ping_redis() -> bool:
    """Startup connectivity check: logs and returns False instead of raising."""
    try:
        client = await get_redis()
        return bool(await client.ping())
    except RedisError:
        logger.warning(
            "Redis at %s is unreachable; order rate limiting is off", settings.REDIS_URL
        )
        return False


async def close_redis() -> None:
    global _client  # noqa: PLW0603
    if _client is None:
        return
    client, _client = _client, None
    await client.aclose()
