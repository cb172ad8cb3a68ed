"""Tests for bt_common.errors and bt_common.response."""

from src.bt_common.errors import (
    AppError,
    BalanceFrozenError,
    InsufficientFundsError,
    InvalidListingIdError,
    InvalidStatusError,
    ListingNotFoundError,
    OrderNotFoundError,
    RateLimitError,
    UnauthorizedError,
)
from src.bt_common.response import ApiResponse, error_response, success_response


class TestAppError:
    def test_base_error(self) -> None:
        err = AppError(code=9002, message="Internal error")
        assert err.code == 9002
        assert err.message == "Internal error"
        assert err.http_status == 500
        assert err.error == "SERVER_ERROR"

    def test_is_exception(self) -> None:
        assert isinstance(AppError(code=1, message="test"), Exception)


class TestSpecificErrors:
    def test_insufficient_funds(self) -> None:
        err = InsufficientFundsError(required="15 000 ₽", available="10 000 ₽")
        assert err.code == 2001
        assert err.http_status == 402
        assert err.error == "INSUFFICIENT_FUNDS"
        assert err.message.startswith("Недостаточно средств, пополните счет")
        assert "15 000 ₽" in err.message
        assert "10 000 ₽" in err.message

    def test_balance_frozen(self) -> None:
        err = BalanceFrozenError()
        assert err.http_status == 423
        assert err.error == "BALANCE_FROZEN"
        assert err.message == "Баланс пользователя заморожен"

    def test_listing_errors(self) -> None:
        assert InvalidListingIdError().http_status == 400
        err = ListingNotFoundError("lot-1")
        assert err.http_status == 404
        assert err.error == "LISTING_NOT_FOUND"
        assert "lot-1" in err.message

    def test_order_errors(self) -> None:
        assert OrderNotFoundError(5).http_status == 404
        err = InvalidStatusError("too long", "STATUS_TOO_LONG")
        assert err.http_status == 400
        assert err.error == "STATUS_TOO_LONG"

    def test_system_errors(self) -> None:
        assert UnauthorizedError().http_status == 401
        assert RateLimitError().http_status == 429


class TestApiResponse:
    def test_success(self) -> None:
        resp = success_response({"ok": True})
        assert resp.code == 0
        assert resp.message == "success"
        assert resp.error is None
        assert resp.data == {"ok": True}
        assert resp.request_id.startswith("req_")
        assert resp.timestamp

    def test_error(self) -> None:
        resp = error_response(2002, "Баланс пользователя заморожен", "BALANCE_FROZEN")
        assert resp.code == 2002
        assert resp.error == "BALANCE_FROZEN"
        assert resp.data is None

    def test_serialization_keys(self) -> None:
        dumped = ApiResponse().model_dump()
        assert set(dumped) == {"code", "message", "error", "data", "timestamp", "request_id"}
