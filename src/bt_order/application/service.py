# src/bt_order/application/service.py
"""OrderApplicationService: paid order issuance plus user/admin order views.

issue_order runs one transaction per request:
    listing lookup (no lock)
    -> SELECT users ... FOR UPDATE
    -> frozen check -> quote -> balance check
    -> conditional debit -> INSERT order
    -> COMMIT
Any failure after the lookup rolls the whole transaction back and re-raises;
the user row lock serializes concurrent orders of the same user.
"""

import logging
from decimal import Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.bt_common.database import safe_rollback
from src.bt_common.enums import OrderKind
from src.bt_common.errors import (
    BalanceFrozenError,
    InsufficientFundsError,
    InvalidListingIdError,
    InvalidOrderIdError,
    ListingNotFoundError,
    OrderNotFoundError,
    UserNotFoundError,
)
from src.bt_common.money import format_rub
from src.bt_listing.domain.listing_ref import parse_listing_ref
from src.bt_listing.domain.repository import ListingRepositoryProtocol
from src.bt_listing.infrastructure.persistence import ListingRepository
from src.bt_order.application.schemas import (
    CreateOrderResponse,
    OrderListResponse,
    OrderOut,
    StatusListResponse,
    UnreadCountResponse,
)
from src.bt_order.domain.models import ServiceOrder
from src.bt_order.domain.repository import OrderRepositoryProtocol
from src.bt_order.domain.statuses import (
    INITIAL_STATUS,
    INSPECTION_STATUSES,
    resolve_inspection_status,
    validate_status_label,
)
from src.bt_order.infrastructure.persistence import OrderRepository
from src.bt_pricing.application.service import PricingApplicationService
from src.bt_pricing.domain.models import PricingQuote

logger = logging.getLogger(__name__)

_MAX_ORDER_ID = 2**63 - 1


def parse_order_id(raw: Any) -> int:
    """Path ids are BIGSERIAL; anything else is a 400, not a 404."""
    try:
        order_id = int(str(raw).strip())
    except ValueError:
        raise InvalidOrderIdError() from None
    if order_id <= 0 or order_id > _MAX_ORDER_ID:
        raise InvalidOrderIdError()
    return order_id


def _normalize_filter(status: str | None) -> str | None:
    if status is None:
        return None
    return status.strip() or None


class OrderApplicationService:
    def __init__(
        self,
        repo: OrderRepositoryProtocol | None = None,
        listings: ListingRepositoryProtocol | None = None,
        pricing: PricingApplicationService | None = None,
    ) -> None:
        self._repo: OrderRepositoryProtocol = repo or OrderRepository()
        self._listings: ListingRepositoryProtocol = listings or ListingRepository()
        self._pricing = pricing or PricingApplicationService(listings=self._listings)

    # ------------------------------------------------------------------
    # Issuance
    # ------------------------------------------------------------------

    async def _quote(
        self, db: AsyncSession, kind: OrderKind, listing: Any, subscription_status: str
    ) -> PricingQuote:
        if kind is OrderKind.INSPECTION:
            return self._pricing.quote_inspection(listing, subscription_status)
        return await self._pricing.quote_trade_order(db, listing, subscription_status)

    async def issue_order(
        self, db: AsyncSession, user_id: str, raw_listing_id: Any, kind: OrderKind
    ) -> CreateOrderResponse:
        ref = parse_listing_ref(raw_listing_id, settings.MAX_LISTING_ID_LENGTH)
        if ref is None:
            raise InvalidListingIdError()

        listing = await self._listings.get_by_ref(db, ref)
        if listing is None:
            raise ListingNotFoundError(str(ref))

        try:
            user = await self._repo.lock_user(db, user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            if user.balance_frozen:
                raise BalanceFrozenError()

            quote = await self._quote(db, kind, listing, user.subscription_status)
            amount = Decimal(quote.final_amount)
            if user.balance < amount:
                raise InsufficientFundsError(format_rub(amount), format_rub(user.balance))

            new_balance = await self._repo.debit_balance(db, user_id, amount)
            if new_balance is None:
                raise InsufficientFundsError(format_rub(amount), format_rub(user.balance))

            order = await self._repo.insert_order(
                db, kind, user_id, listing.id, INITIAL_STATUS[kind], quote
            )
            await db.commit()
        except Exception:
            await safe_rollback(db)
            raise

        logger.info(
            "Issued %s #%s for user %s: listing=%s tier=%r amount=%s balance=%s",
            kind.value,
            order.id,
            user_id,
            listing.id,
            quote.tier_label,
            amount,
            new_balance,
        )
        order.listing_title = listing.title
        return CreateOrderResponse(order=OrderOut.from_domain(order))

    # ------------------------------------------------------------------
    # User views
    # ------------------------------------------------------------------

    async def list_my_orders(
        self,
        db: AsyncSession,
        kind: OrderKind,
        user_id: str,
        status: str | None = None,
        mark_viewed: bool = False,
    ) -> OrderListResponse:
        """Unread flags in the response reflect the state before marking."""
        orders = await self._repo.list_for_user(db, kind, user_id, _normalize_filter(status))
        if mark_viewed:
            try:
                await self._repo.mark_user_viewed(db, kind, user_id)
                await db.commit()
            except Exception:
                await safe_rollback(db)
                raise
        return OrderListResponse(items=[OrderOut.from_domain(o) for o in orders])

    async def count_my_unread(
        self, db: AsyncSession, kind: OrderKind, user_id: str
    ) -> UnreadCountResponse:
        return UnreadCountResponse(count=await self._repo.count_user_unread(db, kind, user_id))

    async def list_statuses(self, db: AsyncSession, kind: OrderKind) -> StatusListResponse:
        if kind is OrderKind.INSPECTION:
            return StatusListResponse(statuses=list(INSPECTION_STATUSES))
        return StatusListResponse(statuses=await self._repo.list_trade_statuses(db))

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    async def admin_list(
        self, db: AsyncSession, kind: OrderKind, status: str | None = None
    ) -> OrderListResponse:
        orders = await self._repo.list_all(db, kind, _normalize_filter(status))
        return OrderListResponse(items=[OrderOut.from_domain(o) for o in orders])

    async def admin_count_unread(self, db: AsyncSession, kind: OrderKind) -> UnreadCountResponse:
        return UnreadCountResponse(count=await self._repo.count_admin_unread(db, kind))

    async def admin_get(self, db: AsyncSession, kind: OrderKind, raw_order_id: Any) -> OrderOut:
        """Opening an order marks it viewed for admins."""
        order_id = parse_order_id(raw_order_id)
        try:
            if not await self._repo.mark_admin_viewed(db, kind, order_id):
                raise OrderNotFoundError(order_id)
            order = await self._repo.get_by_id(db, kind, order_id)
            await db.commit()
        except Exception:
            await safe_rollback(db)
            raise
        if order is None:
            raise OrderNotFoundError(order_id)
        return OrderOut.from_domain(order)

    async def _resolve_status(self, db: AsyncSession, kind: OrderKind, raw: Any) -> str:
        if kind is OrderKind.INSPECTION:
            return resolve_inspection_status(raw)
        label = validate_status_label(raw)
        if await self._repo.add_trade_status(db, label):
            logger.warning("New trade order status added to catalog: %r", label)
        return label

    async def admin_update_status(
        self, db: AsyncSession, kind: OrderKind, raw_order_id: Any, raw_status: Any
    ) -> OrderOut:
        order_id = parse_order_id(raw_order_id)
        try:
            status = await self._resolve_status(db, kind, raw_status)
            order: ServiceOrder | None = await self._repo.update_status(
                db, kind, order_id, status
            )
            if order is None:
                raise OrderNotFoundError(order_id)
            await db.commit()
        except Exception:
            await safe_rollback(db)
            raise
        logger.info("%s #%s status -> %r", kind.value, order_id, status)
        return OrderOut.from_domain(order)
