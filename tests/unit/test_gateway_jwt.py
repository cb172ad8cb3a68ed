"""Unit tests for JWT handler."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from config.settings import settings
from src.bt_common.errors import UnauthorizedError
from src.bt_gateway.auth.jwt_handler import create_access_token, decode_token


def test_access_token_contains_correct_claims() -> None:
    token = create_access_token("3f1c0c9e-0000-4000-8000-000000000001", role="admin")
    payload = jwt.get_unverified_claims(token)
    assert payload["sub"] == "3f1c0c9e-0000-4000-8000-000000000001"
    assert payload["role"] == "admin"
    assert "exp" in payload


def test_decode_valid_token() -> None:
    token = create_access_token("user-abc")
    assert decode_token(token)["sub"] == "user-abc"


def test_expired_token_raises() -> None:
    now = datetime.now(UTC)
    token = jwt.encode(
        {"sub": "user-abc", "iat": now - timedelta(hours=2), "exp": now - timedelta(hours=1)},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )
    with pytest.raises(UnauthorizedError):
        decode_token(token)


def test_wrong_secret_raises() -> None:
    token = jwt.encode({"sub": "user-abc"}, "other-secret", algorithm="HS256")
    with pytest.raises(UnauthorizedError):
        decode_token(token)


def test_missing_sub_raises() -> None:
    token = jwt.encode({"role": "user"}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    with pytest.raises(UnauthorizedError):
        decode_token(token)


def test_garbage_raises() -> None:
    with pytest.raises(UnauthorizedError):
        decode_token("not-a-jwt")
