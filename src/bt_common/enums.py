"""Global enums: must match DB CHECK constraints exactly."""

from enum import Enum


class SubscriptionStatus(str, Enum):
    FREE = "free"
    PRO = "pro"


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class OrderKind(str, Enum):
    """Paid service ordered against a listing; value is the backing table name."""
    INSPECTION = "inspections"
    TRADE_ORDER = "trade_orders"


class TradePricingMode(str, Enum):
    TIERS = "tiers"
    DEPOSIT = "deposit"


class ListingRefKind(str, Enum):
    INTERNAL = "internal"    # numeric listings.id
    EXTERNAL = "external"    # opaque listings.source_id from the parser
