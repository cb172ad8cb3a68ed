"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/User
  2xxx: Balance
  3xxx: Listing
  4xxx: Order
  5xxx: Pricing
  9xxx: System

``error`` is the symbolic name returned to the client next to the numeric code.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
        error: str = "SERVER_ERROR",
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.error = error
        super().__init__(message)


# --- 1xxx: Auth/User ---

class UnauthorizedError(AppError):
    def __init__(self) -> None:
        super().__init__(1000, "Invalid or expired token", 401, "UNAUTHORIZED")


class AccountBlockedError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Account is blocked", 403, "BLOCKED")


class AdminRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Admin only", 403, "ADMIN_ONLY")


class UserNotFoundError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(1003, f"User not found: {user_id}", 404, "USER_NOT_FOUND")


# --- 2xxx: Balance ---

class InsufficientFundsError(AppError):
    def __init__(self, required: object, available: object) -> None:
        super().__init__(
            2001,
            f"Недостаточно средств, пополните счет (нужно {required}, доступно {available})",
            402,
            "INSUFFICIENT_FUNDS",
        )


class BalanceFrozenError(AppError):
    def __init__(self) -> None:
        super().__init__(2002, "Баланс пользователя заморожен", 423, "BALANCE_FROZEN")


class InvalidAmountError(AppError):
    def __init__(self) -> None:
        super().__init__(2003, "Некорректная сумма", 400, "BAD_AMOUNT")


# --- 3xxx: Listing ---

class InvalidListingIdError(AppError):
    def __init__(self) -> None:
        super().__init__(3001, "listingId required", 400, "BAD_LISTING_ID")


class ListingNotFoundError(AppError):
    def __init__(self, listing_ref: str) -> None:
        super().__init__(3002, f"Listing not found: {listing_ref}", 404, "LISTING_NOT_FOUND")


# --- 4xxx: Order ---

class InvalidOrderIdError(AppError):
    def __init__(self) -> None:
        super().__init__(4001, "Invalid order id", 400, "BAD_ID")


class OrderNotFoundError(AppError):
    def __init__(self, order_id: object) -> None:
        super().__init__(4004, f"Order not found: {order_id}", 404, "NOT_FOUND")


class InvalidStatusError(AppError):
    def __init__(self, detail: str, error: str = "BAD_STATUS") -> None:
        super().__init__(4005, detail, 400, error)


# --- 5xxx: Pricing ---

class InvalidPercentError(AppError):
    def __init__(self) -> None:
        super().__init__(5001, "Deposit percent must be a number between 0 and 100", 400, "BAD_PERCENT")


class InvalidTierError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(5002, f"Invalid price tier: {detail}", 400, "BAD_TIER")


class TierNotFoundError(AppError):
    def __init__(self, tier_id: int) -> None:
        super().__init__(5003, f"Price tier not found: {tier_id}", 404, "NOT_FOUND")


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Rate limit exceeded", 429, "RATE_LIMITED")


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500, "SERVER_ERROR")


class BadRequestError(AppError):
    def __init__(self, detail: str = "Invalid request") -> None:
        super().__init__(9003, detail, 400, "BAD_REQUEST")
