"""002: create users table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE users (
            id                  UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            phone               VARCHAR(32)     NOT NULL,
            name                VARCHAR(255),
            role                VARCHAR(16)     NOT NULL DEFAULT 'user',
            balance             NUMERIC(14, 2)  NOT NULL DEFAULT 0,
            subscription_status VARCHAR(16)     NOT NULL DEFAULT 'free',
            balance_frozen      BOOLEAN         NOT NULL DEFAULT FALSE,
            is_blocked          BOOLEAN         NOT NULL DEFAULT FALSE,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_users_phone               UNIQUE (phone),
            CONSTRAINT ck_users_balance_non_negative CHECK (balance >= 0),
            CONSTRAINT ck_users_role                CHECK (role IN ('user', 'admin')),
            CONSTRAINT ck_users_subscription        CHECK (subscription_status IN ('free', 'pro'))
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_users_updated_at
            BEFORE UPDATE ON users
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE users IS 'Пользователи: баланс, подписка, блокировки';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS users CASCADE;")
