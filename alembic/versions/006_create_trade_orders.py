"""006: create trade order status catalog and trade_orders table

Revision ID: 006
Revises: 005
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Open status catalog; admins may add labels at runtime
    op.execute("""
        CREATE TABLE trade_order_statuses (
            label       VARCHAR(200)    PRIMARY KEY,
            sort_order  INTEGER         NOT NULL DEFAULT 0,
            CONSTRAINT ck_trade_order_statuses_label CHECK (LENGTH(TRIM(label)) > 0)
        );
    """)
    # No updated_at trigger: viewed-marker updates must not bump updated_at
    op.execute("""
        CREATE TABLE trade_orders (
            id                   BIGSERIAL       PRIMARY KEY,
            user_id              UUID            NOT NULL REFERENCES users (id),
            listing_id           BIGINT          NOT NULL REFERENCES listings (id),
            status               VARCHAR(200)    NOT NULL
                                 REFERENCES trade_order_statuses (label) ON UPDATE CASCADE,
            base_price           NUMERIC(14, 2)  NOT NULL,
            discount_percent     NUMERIC(5, 2)   NOT NULL DEFAULT 0,
            final_amount         NUMERIC(14, 2)  NOT NULL,
            service_tier         VARCHAR(200),
            lot_price_estimate   BIGINT,
            created_at           TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at           TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            user_last_viewed_at  TIMESTAMPTZ,
            admin_last_viewed_at TIMESTAMPTZ,
            CONSTRAINT ck_trade_orders_final_amount CHECK (final_amount >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_trade_orders_user ON trade_orders (user_id, created_at DESC);")
    op.execute("CREATE INDEX idx_trade_orders_status ON trade_orders (status);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS trade_orders;")
    op.execute("DROP TABLE IF EXISTS trade_order_statuses;")
