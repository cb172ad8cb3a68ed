# src/bt_order/infrastructure/persistence.py
"""OrderRepository: raw SQL persistence for inspections / trade_orders.

Both order tables share columns, so every statement is built once per
OrderKind from a template (the table name comes from the enum, never from
user input).

Transaction ownership: the CALLER commits or rolls back.
"""

from decimal import Decimal
from typing import Any

from sqlalchemy import TextClause, text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bt_common.enums import OrderKind
from src.bt_order.domain.models import ServiceOrder, UserSnapshot
from src.bt_pricing.domain.models import PricingQuote

# ---------------------------------------------------------------------------
# SQL statements
# ---------------------------------------------------------------------------

_LOCK_USER_SQL = text("""
    SELECT id, balance, subscription_status, balance_frozen
    FROM users
    WHERE id = CAST(:user_id AS UUID)
    FOR UPDATE
""")

# Conditional debit: never drives the balance negative, never touches a frozen one
_DEBIT_BALANCE_SQL = text("""
    UPDATE users
    SET balance = balance - :amount, updated_at = NOW()
    WHERE id = CAST(:user_id AS UUID)
      AND balance >= :amount
      AND NOT balance_frozen
    RETURNING balance
""")

_LIST_TRADE_STATUSES_SQL = text("""
    SELECT label FROM trade_order_statuses ORDER BY sort_order ASC, label ASC
""")

_ADD_TRADE_STATUS_SQL = text("""
    INSERT INTO trade_order_statuses (label, sort_order)
    SELECT :label, COALESCE(MAX(sort_order), 0) + 10 FROM trade_order_statuses
    ON CONFLICT (label) DO NOTHING
    RETURNING label
""")

_ORDER_COLUMNS = """
    o.id, o.user_id, o.listing_id, o.status,
    o.base_price, o.discount_percent, o.final_amount,
    o.service_tier, o.lot_price_estimate,
    o.created_at, o.updated_at, o.user_last_viewed_at, o.admin_last_viewed_at
"""

_USER_UNREAD = "(o.user_last_viewed_at IS NULL OR o.user_last_viewed_at < o.updated_at)"
_ADMIN_UNREAD = "(o.admin_last_viewed_at IS NULL OR o.admin_last_viewed_at < o.updated_at)"


def _build_statements(table: str) -> dict[str, TextClause]:
    return {
        "insert": text(f"""
            INSERT INTO {table} AS o (
                user_id, listing_id, status, base_price, discount_percent,
                final_amount, service_tier, lot_price_estimate, user_last_viewed_at
            )
            VALUES (
                CAST(:user_id AS UUID), :listing_id, :status, :base_price, :discount_percent,
                :final_amount, :service_tier, :lot_price_estimate, NOW()
            )
            RETURNING {_ORDER_COLUMNS}
        """),
        "list_for_user": text(f"""
            SELECT {_ORDER_COLUMNS}, l.title AS listing_title
            FROM {table} o
            LEFT JOIN listings l ON l.id = o.listing_id
            WHERE o.user_id = CAST(:user_id AS UUID)
              AND (CAST(:status AS TEXT) IS NULL OR o.status = :status)
            ORDER BY o.created_at DESC, o.id DESC
        """),
        "list_all": text(f"""
            SELECT {_ORDER_COLUMNS}, l.title AS listing_title,
                   u.name AS user_name, u.phone AS user_phone
            FROM {table} o
            JOIN users u ON u.id = o.user_id
            LEFT JOIN listings l ON l.id = o.listing_id
            WHERE (CAST(:status AS TEXT) IS NULL OR o.status = :status)
            ORDER BY o.created_at DESC, o.id DESC
        """),
        "get_by_id": text(f"""
            SELECT {_ORDER_COLUMNS}, l.title AS listing_title,
                   u.name AS user_name, u.phone AS user_phone
            FROM {table} o
            JOIN users u ON u.id = o.user_id
            LEFT JOIN listings l ON l.id = o.listing_id
            WHERE o.id = :id
        """),
        # Status change stamps the admin marker in the same statement so the
        # acting admin does not see their own change as unread.
        "update_status": text(f"""
            UPDATE {table}
            SET status = :status, updated_at = NOW(), admin_last_viewed_at = NOW()
            WHERE id = :id
            RETURNING id
        """),
        "mark_user_viewed": text(f"""
            UPDATE {table} AS o
            SET user_last_viewed_at = NOW()
            WHERE o.user_id = CAST(:user_id AS UUID) AND {_USER_UNREAD}
        """),
        "mark_admin_viewed": text(f"""
            UPDATE {table} SET admin_last_viewed_at = NOW() WHERE id = :id RETURNING id
        """),
        "count_user_unread": text(f"""
            SELECT COUNT(*) AS count FROM {table} o
            WHERE o.user_id = CAST(:user_id AS UUID) AND {_USER_UNREAD}
        """),
        "count_admin_unread": text(f"""
            SELECT COUNT(*) AS count FROM {table} o WHERE {_ADMIN_UNREAD}
        """),
    }


_STATEMENTS: dict[OrderKind, dict[str, TextClause]] = {
    kind: _build_statements(kind.value) for kind in OrderKind
}


# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_order(kind: OrderKind, row: Any) -> ServiceOrder:
    """Convert a DB result row to a ServiceOrder domain object."""
    mapping = row._mapping
    return ServiceOrder(
        kind=kind,
        id=row.id,
        user_id=str(row.user_id),
        listing_id=row.listing_id,
        status=row.status,
        base_price=row.base_price,
        discount_percent=row.discount_percent,
        final_amount=row.final_amount,
        service_tier=row.service_tier,
        lot_price_estimate=row.lot_price_estimate,
        created_at=row.created_at,
        updated_at=row.updated_at,
        user_last_viewed_at=row.user_last_viewed_at,
        admin_last_viewed_at=row.admin_last_viewed_at,
        listing_title=mapping.get("listing_title"),
        user_name=mapping.get("user_name"),
        user_phone=mapping.get("user_phone"),
    )


def _row_to_user(row: Any) -> UserSnapshot:
    return UserSnapshot(
        id=str(row.id),
        balance=Decimal(row.balance),
        subscription_status=row.subscription_status,
        balance_frozen=bool(row.balance_frozen),
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class OrderRepository:
    """Concrete implementation of OrderRepositoryProtocol using raw SQL."""

    async def lock_user(self, db: AsyncSession, user_id: str) -> UserSnapshot | None:
        result = await db.execute(_LOCK_USER_SQL, {"user_id": user_id})
        row = result.fetchone()
        return _row_to_user(row) if row else None

    async def debit_balance(
        self, db: AsyncSession, user_id: str, amount: Decimal
    ) -> Decimal | None:
        """Returns the new balance, or None when the guarded UPDATE matched no row."""
        result = await db.execute(_DEBIT_BALANCE_SQL, {"user_id": user_id, "amount": amount})
        row = result.fetchone()
        return Decimal(row.balance) if row else None

    async def insert_order(
        self,
        db: AsyncSession,
        kind: OrderKind,
        user_id: str,
        listing_id: int,
        status: str,
        quote: PricingQuote,
    ) -> ServiceOrder:
        result = await db.execute(
            _STATEMENTS[kind]["insert"],
            {
                "user_id": user_id,
                "listing_id": listing_id,
                "status": status,
                "base_price": quote.base_price,
                "discount_percent": quote.discount_percent,
                "final_amount": quote.final_amount,
                "service_tier": quote.tier_label,
                "lot_price_estimate": quote.lot_price_estimate,
            },
        )
        return _row_to_order(kind, result.fetchone())

    async def list_for_user(
        self,
        db: AsyncSession,
        kind: OrderKind,
        user_id: str,
        status: str | None = None,
    ) -> list[ServiceOrder]:
        result = await db.execute(
            _STATEMENTS[kind]["list_for_user"], {"user_id": user_id, "status": status}
        )
        return [_row_to_order(kind, row) for row in result.fetchall()]

    async def list_all(
        self, db: AsyncSession, kind: OrderKind, status: str | None = None
    ) -> list[ServiceOrder]:
        result = await db.execute(_STATEMENTS[kind]["list_all"], {"status": status})
        return [_row_to_order(kind, row) for row in result.fetchall()]

    async def get_by_id(
        self, db: AsyncSession, kind: OrderKind, order_id: int
    ) -> ServiceOrder | None:
        result = await db.execute(_STATEMENTS[kind]["get_by_id"], {"id": order_id})
        row = result.fetchone()
        return _row_to_order(kind, row) if row else None

    async def update_status(
        self, db: AsyncSession, kind: OrderKind, order_id: int, status: str
    ) -> ServiceOrder | None:
        result = await db.execute(
            _STATEMENTS[kind]["update_status"], {"id": order_id, "status": status}
        )
        if result.fetchone() is None:
            return None
        return await self.get_by_id(db, kind, order_id)

    async def mark_user_viewed(
        self, db: AsyncSession, kind: OrderKind, user_id: str
    ) -> int:
        result = await db.execute(_STATEMENTS[kind]["mark_user_viewed"], {"user_id": user_id})
        return result.rowcount

    async def mark_admin_viewed(
        self, db: AsyncSession, kind: OrderKind, order_id: int
    ) -> bool:
        result = await db.execute(_STATEMENTS[kind]["mark_admin_viewed"], {"id": order_id})
        return result.fetchone() is not None

    async def count_user_unread(self, db: AsyncSession, kind: OrderKind, user_id: str) -> int:
        result = await db.execute(_STATEMENTS[kind]["count_user_unread"], {"user_id": user_id})
        return int(result.scalar_one())

    async def count_admin_unread(self, db: AsyncSession, kind: OrderKind) -> int:
        result = await db.execute(_STATEMENTS[kind]["count_admin_unread"])
        return int(result.scalar_one())

    async def list_trade_statuses(self, db: AsyncSession) -> list[str]:
        result = await db.execute(_LIST_TRADE_STATUSES_SQL)
        return [row.label for row in result.fetchall()]

    async def add_trade_status(self, db: AsyncSession, label: str) -> bool:
        """True when the label was new to the catalog."""
        result = await db.execute(_ADD_TRADE_STATUS_SQL, {"label": label})
        return result.fetchone() is not None
