"""PRO subscription discount, applied once when an order is created."""

from typing import Any

from src.bt_common.enums import SubscriptionStatus
from src.bt_common.money import round_half_up


def is_pro(subscription_status: Any) -> bool:
    value = getattr(subscription_status, "value", subscription_status)
    return str(value or SubscriptionStatus.FREE.value).strip().lower() == (
        SubscriptionStatus.PRO.value
    )


def apply_discount(
    base_amount: int, subscription_status: Any, pro_percent: float
) -> tuple[float, int]:
    """Return (discount_percent, final_amount); final is rounded half-up and never negative."""
    discount_percent = pro_percent if is_pro(subscription_status) else 0
    final_amount = round_half_up(base_amount * (100 - discount_percent) / 100)
    return discount_percent, max(0, final_amount)
