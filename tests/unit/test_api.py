"""HTTP-level tests: routing, auth dependencies and the response envelope.

Services are swapped for ones built on mock repositories, so no database or
Redis is needed.
"""

from collections.abc import AsyncIterator, Iterator
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.bt_account.api import router as account_router
from src.bt_account.application.service import AccountApplicationService
from src.bt_account.domain.models import UserBalance
from src.bt_common.database import get_db_session
from src.bt_gateway.auth.dependencies import get_current_user
from src.bt_gateway.auth.jwt_handler import create_access_token
from src.bt_gateway.middleware.rate_limit import enforce_order_rate_limit
from src.bt_order.api import admin_router as order_admin_router
from src.bt_order.api import router as order_router
from src.bt_order.application.service import OrderApplicationService
from src.bt_order.infrastructure.persistence import OrderRepository
from src.bt_pricing.api import router as pricing_router
from src.bt_pricing.application.service import PricingApplicationService
from src.bt_pricing.domain.models import PricingConfig
from src.main import app
from tests.conftest import make_listing, make_user


class Harness(SimpleNamespace):
    user: SimpleNamespace
    order_repo: AsyncMock
    listings: AsyncMock
    account_repo: AsyncMock


@pytest.fixture
def harness(monkeypatch: pytest.MonkeyPatch) -> Iterator[Harness]:
    h = Harness(
        user=make_user(),
        order_repo=AsyncMock(spec=OrderRepository),
        listings=AsyncMock(),
        account_repo=AsyncMock(),
    )
    h.listings.get_by_ref.return_value = make_listing(start_price=450_000)
    pricing_repo = AsyncMock()
    pricing_repo.list_tier_rows.return_value = []
    pricing_repo.get_settings.return_value = None
    pricing = PricingApplicationService(PricingConfig(), pricing_repo, h.listings)
    orders = OrderApplicationService(h.order_repo, h.listings, pricing)

    monkeypatch.setattr(order_router, "_service", orders)
    monkeypatch.setattr(order_admin_router, "_service", orders)
    monkeypatch.setattr(pricing_router, "_service", pricing)
    monkeypatch.setattr(account_router, "_service", AccountApplicationService(h.account_repo))

    app.dependency_overrides[get_db_session] = lambda: AsyncMock()
    app.dependency_overrides[get_current_user] = lambda: h.user
    app.dependency_overrides[enforce_order_rate_limit] = lambda: h.user
    yield h
    app.dependency_overrides.clear()


@pytest.fixture
async def api(harness: Harness) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestEnvelope:
    async def test_health(self, api: AsyncClient) -> None:
        resp = await api.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    async def test_request_id_header_matches_body(self, api: AsyncClient) -> None:
        resp = await api.get("/api/trade-pricing")

        body = resp.json()
        assert resp.status_code == 200
        assert body["code"] == 0
        assert body["request_id"] == resp.headers["X-Request-ID"]
        assert len(body["data"]["tiers"]) == 4

    async def test_incoming_request_id_is_kept(self, api: AsyncClient) -> None:
        resp = await api.get("/api/trade-pricing", headers={"X-Request-ID": "edge-7f3a91c2"})

        assert resp.headers["X-Request-ID"] == "edge-7f3a91c2"
        assert resp.json()["request_id"] == "edge-7f3a91c2"

    async def test_error_envelope_carries_request_id(self, api: AsyncClient) -> None:
        resp = await api.post("/api/trade-orders", json={})

        assert resp.status_code == 400
        assert resp.json()["request_id"] == resp.headers["X-Request-ID"]

    async def test_validation_error_is_bad_request(self, api: AsyncClient) -> None:
        resp = await api.post(
            "/api/me/balance-add", content="not json", headers={"content-type": "application/json"}
        )

        assert resp.status_code == 400
        assert resp.json()["error"] == "BAD_REQUEST"
        assert resp.json()["data"] is None


class TestAuth:
    async def test_missing_token(self, api: AsyncClient) -> None:
        app.dependency_overrides.pop(get_current_user)

        resp = await api.get("/api/me/balance")

        assert resp.status_code == 401
        assert resp.json()["error"] == "UNAUTHORIZED"

    async def test_garbage_token(self, api: AsyncClient) -> None:
        app.dependency_overrides.pop(get_current_user)

        resp = await api.get("/api/me/balance", headers={"Authorization": "Bearer nope"})

        assert resp.status_code == 401

    @pytest.mark.parametrize(
        ("is_blocked", "status", "error"),
        [(None, 404, "USER_NOT_FOUND"), (True, 403, "BLOCKED")],
    )
    async def test_token_user_lookup(
        self, api: AsyncClient, is_blocked: bool | None, status: int, error: str
    ) -> None:
        app.dependency_overrides.pop(get_current_user)
        found = None if is_blocked is None else make_user(is_blocked=is_blocked)
        result = MagicMock()
        result.scalar_one_or_none.return_value = found
        db = AsyncMock()
        db.execute.return_value = result
        app.dependency_overrides[get_db_session] = lambda: db
        token = create_access_token("3f1c0c9e-0000-4000-8000-000000000002")

        resp = await api.get("/api/me/balance", headers={"Authorization": f"Bearer {token}"})

        assert resp.status_code == status
        assert resp.json()["error"] == error

    async def test_admin_route_rejects_user(self, api: AsyncClient) -> None:
        resp = await api.get("/api/admin/trade-orders")

        assert resp.status_code == 403
        assert resp.json()["error"] == "ADMIN_ONLY"


class TestOrders:
    async def test_create_trade_order_insufficient_funds(
        self, api: AsyncClient, harness: Harness
    ) -> None:
        harness.order_repo.lock_user.return_value = SimpleNamespace(
            id=str(harness.user.id),
            balance=Decimal("100.00"),
            subscription_status="free",
            balance_frozen=False,
        )

        resp = await api.post("/api/trade-orders", json={"listingId": 42})

        assert resp.status_code == 402
        assert resp.json()["error"] == "INSUFFICIENT_FUNDS"
        harness.order_repo.debit_balance.assert_not_awaited()

    async def test_create_inspection_frozen(self, api: AsyncClient, harness: Harness) -> None:
        harness.order_repo.lock_user.return_value = SimpleNamespace(
            id=str(harness.user.id),
            balance=Decimal("100000.00"),
            subscription_status="free",
            balance_frozen=True,
        )

        resp = await api.post("/api/inspections", json={"listing_id": "42"})

        assert resp.status_code == 423
        assert resp.json()["error"] == "BALANCE_FROZEN"

    async def test_missing_listing_id(self, api: AsyncClient) -> None:
        resp = await api.post("/api/trade-orders", json={})

        assert resp.status_code == 400
        assert resp.json()["error"] == "BAD_LISTING_ID"

    async def test_unknown_listing(self, api: AsyncClient, harness: Harness) -> None:
        harness.listings.get_by_ref.return_value = None

        resp = await api.post("/api/trade-orders", json={"listingId": "efrsb-77"})

        assert resp.status_code == 404
        assert resp.json()["error"] == "LISTING_NOT_FOUND"

    async def test_statuses(self, api: AsyncClient) -> None:
        resp = await api.get("/api/inspections/statuses")

        assert resp.json()["data"]["statuses"][0] == "Идет модерация"

    async def test_unread_count(self, api: AsyncClient, harness: Harness) -> None:
        harness.order_repo.count_user_unread.return_value = 2

        resp = await api.get("/api/trade-orders/unread-count")

        assert resp.json()["data"] == {"count": 2}

    @pytest.mark.parametrize(
        ("params", "marked"),
        [
            ({"markViewed": "1"}, True),
            ({"mark_viewed": "true"}, True),
            ({}, False),
        ],
    )
    async def test_list_mine_mark_viewed_param(
        self, api: AsyncClient, harness: Harness, params: dict[str, str], marked: bool
    ) -> None:
        harness.order_repo.list_for_user.return_value = []

        resp = await api.get("/api/trade-orders/me", params=params)

        assert resp.status_code == 200
        assert harness.order_repo.mark_user_viewed.await_count == int(marked)


class TestAdmin:
    @pytest.fixture(autouse=True)
    def _admin(self, harness: Harness) -> None:
        harness.user.role = "admin"

    async def test_bad_order_id(self, api: AsyncClient) -> None:
        resp = await api.get("/api/admin/inspections/abc")

        assert resp.status_code == 400
        assert resp.json()["error"] == "BAD_ID"

    async def test_order_not_found(self, api: AsyncClient, harness: Harness) -> None:
        harness.order_repo.mark_admin_viewed.return_value = False

        resp = await api.get("/api/admin/trade-orders/5")

        assert resp.status_code == 404
        assert resp.json()["error"] == "NOT_FOUND"

    async def test_bad_inspection_status(self, api: AsyncClient) -> None:
        resp = await api.put("/api/admin/inspections/5/status", json={"status": "отменен"})

        assert resp.status_code == 400
        assert resp.json()["error"] == "BAD_STATUS"

    async def test_freeze_balance(self, api: AsyncClient, harness: Harness) -> None:
        user_id = "3f1c0c9e-0000-4000-8000-000000000001"
        harness.account_repo.set_frozen.return_value = UserBalance(
            user_id=user_id, balance=Decimal("0"), balance_frozen=True
        )

        resp = await api.post(f"/api/admin/users/{user_id}/freeze-balance", json={"freeze": True})

        assert resp.status_code == 200
        assert resp.json()["data"]["balance_frozen"] is True
