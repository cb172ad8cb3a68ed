"""Integration-test fixtures.

All integration tests share a single event-loop so that the module-level
SQLAlchemy async engine pool and Redis pool (both created at import time)
remain valid across the entire test session.

Users and listings are inserted directly: registration and listing ingestion
live outside this service.
"""

import uuid
from collections.abc import Awaitable, Callable
from decimal import Decimal
from typing import Any

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

from src.bt_common.database import async_session_factory
from src.bt_gateway.auth.jwt_handler import create_access_token
from src.main import app

_INSERT_USER_SQL = text("""
    INSERT INTO users (phone, name, role, balance, subscription_status, balance_frozen)
    VALUES (:phone, :name, :role, :balance, :subscription_status, :balance_frozen)
    RETURNING id
""")

_INSERT_LISTING_SQL = text("""
    INSERT INTO listings (source_id, title, start_price, details)
    VALUES (:source_id, :title, :start_price, CAST(:details AS JSONB))
    RETURNING id
""")


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client: keeps the engine pool alive."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _insert(sql: Any, params: dict[str, Any]) -> Any:
    async with async_session_factory() as session:
        result = await session.execute(sql, params)
        new_id = result.scalar_one()
        await session.commit()
    return new_id


@pytest_asyncio.fixture(loop_scope="session")
async def create_user() -> Callable[..., Awaitable[dict[str, Any]]]:
    """Factory: insert a user and return its id plus Bearer headers."""

    async def _create(
        balance: str = "0",
        subscription_status: str = "free",
        role: str = "user",
        balance_frozen: bool = False,
    ) -> dict[str, Any]:
        user_id = await _insert(
            _INSERT_USER_SQL,
            {
                "phone": f"+7999{uuid.uuid4().int % 10**7:07d}",
                "name": "Integration User",
                "role": role,
                "balance": Decimal(balance),
                "subscription_status": subscription_status,
                "balance_frozen": balance_frozen,
            },
        )
        token = create_access_token(str(user_id), role)
        return {"id": str(user_id), "headers": {"Authorization": f"Bearer {token}"}}

    return _create


@pytest_asyncio.fixture(loop_scope="session")
async def create_listing() -> Callable[..., Awaitable[int]]:
    async def _create(start_price: int | None = 450_000, details: str = "{}") -> int:
        return int(
            await _insert(
                _INSERT_LISTING_SQL,
                {
                    "source_id": f"it-{uuid.uuid4().hex[:12]}",
                    "title": "Integration lot",
                    "start_price": start_price,
                    "details": details,
                },
            )
        )

    return _create
