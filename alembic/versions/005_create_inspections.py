"""005: create inspections table

Revision ID: 005
Revises: 004
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # No updated_at trigger: viewed-marker updates must not bump updated_at
    op.execute("""
        CREATE TABLE inspections (
            id                   BIGSERIAL       PRIMARY KEY,
            user_id              UUID            NOT NULL REFERENCES users (id),
            listing_id           BIGINT          NOT NULL REFERENCES listings (id),
            status               VARCHAR(200)    NOT NULL DEFAULT 'Идет модерация',
            base_price           NUMERIC(14, 2)  NOT NULL,
            discount_percent     NUMERIC(5, 2)   NOT NULL DEFAULT 0,
            final_amount         NUMERIC(14, 2)  NOT NULL,
            service_tier         VARCHAR(200),
            lot_price_estimate   BIGINT,
            created_at           TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at           TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            user_last_viewed_at  TIMESTAMPTZ,
            admin_last_viewed_at TIMESTAMPTZ,
            CONSTRAINT ck_inspections_final_amount CHECK (final_amount >= 0),
            CONSTRAINT ck_inspections_status CHECK (
                status IN ('Идет модерация', 'Выполняется осмотр машины', 'Завершен')
            )
        );
    """)
    op.execute("CREATE INDEX idx_inspections_user ON inspections (user_id, created_at DESC);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS inspections;")
