"""004: create authorized bots and reward pool

Revision ID: 004
Revises: 003
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE authorized_bots (
            account         VARCHAR(128)    PRIMARY KEY,
            authorized      BOOLEAN         NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW()
        );
    """)
    # Single-row table: the redemption pool is global
    op.execute("""
        CREATE TABLE reward_pool (
            id                      SMALLINT        PRIMARY KEY DEFAULT 1,
            total_shares_issued     NUMERIC(78, 0)  NOT NULL DEFAULT 0,
            protocol_token_balance  NUMERIC(78, 0)  NOT NULL DEFAULT 0,
            protocol_token          VARCHAR(128),
            updated_at              TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_reward_pool_singleton     CHECK (id = 1),
            CONSTRAINT ck_reward_pool_issued_gte_0  CHECK (total_shares_issued >= 0),
            CONSTRAINT ck_reward_pool_balance_gte_0 CHECK (protocol_token_balance >= 0)
        );
    """)
    for table in ("authorized_bots", "reward_pool"):
        op.execute(f"""
            CREATE TRIGGER trg_{table}_updated_at
            BEFORE UPDATE ON {table}
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
        """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS reward_pool CASCADE;")
    op.execute("DROP TABLE IF EXISTS authorized_bots CASCADE;")
