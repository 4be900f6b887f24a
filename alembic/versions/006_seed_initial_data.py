"""006: seed initial data

Revision ID: 006
Revises: 005
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Native currency and reward token ledgers
    op.execute("""
        INSERT INTO token_ledgers (id, total_supply)
        VALUES ('NATIVE', 0), ('REWARD', 0)
        ON CONFLICT (id) DO NOTHING;
    """)
    op.execute("INSERT INTO reward_pool (id) VALUES (1) ON CONFLICT (id) DO NOTHING;")


def downgrade() -> None:
    op.execute("DELETE FROM reward_pool WHERE id = 1;")
    op.execute("DELETE FROM token_balances WHERE ledger_id IN ('NATIVE', 'REWARD');")
    op.execute("DELETE FROM token_ledgers WHERE id IN ('NATIVE', 'REWARD');")
