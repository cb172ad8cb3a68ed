"""003: create listings table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Filled by the ingestion pipeline; read-only for this service
    op.execute("""
        CREATE TABLE listings (
            id              BIGSERIAL       PRIMARY KEY,
            source_id       VARCHAR(160),
            title           TEXT            NOT NULL DEFAULT '',
            region          VARCHAR(255),
            asset_type      VARCHAR(64),
            currency        VARCHAR(8),
            start_price     NUMERIC(16, 2),
            current_price   NUMERIC(16, 2),
            min_price       NUMERIC(16, 2),
            max_price       NUMERIC(16, 2),
            price           NUMERIC(16, 2),
            amount          NUMERIC(16, 2),
            lot_price       NUMERIC(16, 2),
            end_date        TIMESTAMPTZ,
            source_url      TEXT,
            details         JSONB           NOT NULL DEFAULT '{}'::jsonb,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_listings_source_id UNIQUE (source_id)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_listings_updated_at
            BEFORE UPDATE ON listings
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS listings CASCADE;")
