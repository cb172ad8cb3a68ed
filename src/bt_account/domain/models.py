"""Account domain model: balance fields of a users row."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class UserBalance:
    user_id: str
    balance: Decimal        # rubles, NUMERIC(14,2), never negative
    balance_frozen: bool = False
    subscription_status: str = "free"
