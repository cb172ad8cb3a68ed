"""Shared test fixtures and factories."""

import os

# Settings() requires JWT_SECRET; must be set before anything imports config.settings
os.environ.setdefault("JWT_SECRET", "test-secret")

import uuid  # noqa: E402
from decimal import Decimal  # noqa: E402
from types import SimpleNamespace  # noqa: E402

from src.bt_listing.domain.models import Listing  # noqa: E402


def make_user(
    role: str = "user",
    subscription_status: str = "free",
    balance: str = "100000.00",
    balance_frozen: bool = False,
    is_blocked: bool = False,
) -> SimpleNamespace:
    """Stand-in for UserModel as returned by get_current_user."""
    return SimpleNamespace(
        id=uuid.uuid4(),
        phone="+79990000000",
        name="Test User",
        role=role,
        balance=Decimal(balance),
        subscription_status=subscription_status,
        balance_frozen=balance_frozen,
        is_blocked=is_blocked,
    )


def make_listing(**kwargs: object) -> Listing:
    defaults: dict[str, object] = {"id": 42, "title": "Toyota Camry 2018"}
    defaults.update(kwargs)
    return Listing(**defaults)  # type: ignore[arg-type]
