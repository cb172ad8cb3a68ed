"""004: create trade pricing tables

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE trade_pricing_tiers (
            id          BIGSERIAL       PRIMARY KEY,
            label       VARCHAR(200)    NOT NULL,
            amount      BIGINT          NOT NULL,
            max_amount  BIGINT,
            sort_order  INTEGER         NOT NULL DEFAULT 0,
            created_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_tiers_amount_non_negative CHECK (amount >= 0),
            CONSTRAINT ck_tiers_max_positive        CHECK (max_amount IS NULL OR max_amount > 0)
        );
    """)
    op.execute("""
        CREATE TABLE trade_pricing_settings (
            id              SMALLINT        PRIMARY KEY,
            deposit_percent NUMERIC(5, 2)   NOT NULL DEFAULT 10,
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_pricing_settings_singleton CHECK (id = 1),
            CONSTRAINT ck_pricing_settings_percent   CHECK (deposit_percent BETWEEN 0 AND 100)
        );
    """)
    op.execute("INSERT INTO trade_pricing_settings (id, deposit_percent) VALUES (1, 10);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS trade_pricing_settings;")
    op.execute("DROP TABLE IF EXISTS trade_pricing_tiers;")
