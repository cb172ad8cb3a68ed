"""Unit tests for the order rate limiter dependency."""

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from config.settings import settings
from src.bt_common.errors import RateLimitError
from src.bt_gateway.middleware import rate_limit
from tests.conftest import make_user


@pytest.fixture
def redis(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    client = AsyncMock()
    monkeypatch.setattr(rate_limit, "get_redis", AsyncMock(return_value=client))
    monkeypatch.setattr(settings, "ORDER_RATE_LIMIT_PER_MINUTE", 3)
    return client


class TestOrderRateLimit:
    async def test_first_hit_sets_window(self, redis: AsyncMock) -> None:
        redis.incr.return_value = 1
        user = make_user()

        assert await rate_limit.enforce_order_rate_limit(user) is user

        key = f"ratelimit:{user.id}:orders"
        redis.incr.assert_awaited_once_with(key)
        redis.expire.assert_awaited_once_with(key, 60)

    async def test_within_limit_keeps_window(self, redis: AsyncMock) -> None:
        redis.incr.return_value = 3

        await rate_limit.enforce_order_rate_limit(make_user())

        redis.expire.assert_not_awaited()

    async def test_over_limit(self, redis: AsyncMock) -> None:
        redis.incr.return_value = 4

        with pytest.raises(RateLimitError) as exc_info:
            await rate_limit.enforce_order_rate_limit(make_user())

        assert exc_info.value.http_status == 429

    async def test_redis_down_lets_request_through(self, redis: AsyncMock) -> None:
        redis.incr.side_effect = RedisConnectionError("refused")
        user = make_user()

        assert await rate_limit.enforce_order_rate_limit(user) is user

    async def test_disabled(self, redis: AsyncMock, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "ORDER_RATE_LIMIT_PER_MINUTE", 0)

        await rate_limit.enforce_order_rate_limit(make_user())

        redis.incr.assert_not_awaited()
