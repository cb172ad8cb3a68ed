"""007: seed default price tiers and trade order statuses

Revision ID: 007
Revises: 006
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "007"
down_revision: Union[str, None] = "006"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        INSERT INTO trade_pricing_tiers (label, amount, max_amount, sort_order) VALUES
            ('Лот до 500 000 ₽',      15000,  500000, 10),
            ('Лот до 1 500 000 ₽',    25000, 1500000, 20),
            ('Лот до 3 000 000 ₽',    35000, 3000000, 30),
            ('Лот свыше 3 000 000 ₽', 50000,    NULL, 40);
    """)
    op.execute("""
        INSERT INTO trade_order_statuses (label, sort_order) VALUES
            ('Оплачен/Ожидание модерации', 10),
            ('Заявка подтверждена',        20),
            ('Подготовка к торгам',        30),
            ('Торги завершены',            40);
    """)


def downgrade() -> None:
    op.execute("DELETE FROM trade_pricing_tiers;")
    op.execute("""
        DELETE FROM trade_order_statuses
        WHERE label NOT IN (SELECT DISTINCT status FROM trade_orders);
    """)
