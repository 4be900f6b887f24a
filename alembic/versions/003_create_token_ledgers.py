"""003: create token ledgers and balances

Revision ID: 003
Revises: 002
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE token_ledgers (
            id              VARCHAR(128)    PRIMARY KEY,
            total_supply    NUMERIC(78, 0)  NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_token_ledgers_supply_gte_0 CHECK (total_supply >= 0)
        );
    """)
    op.execute("""
        CREATE TABLE token_balances (
            ledger_id       VARCHAR(128)    NOT NULL REFERENCES token_ledgers(id),
            account         VARCHAR(128)    NOT NULL,
            balance         NUMERIC(78, 0)  NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            PRIMARY KEY (ledger_id, account),
            CONSTRAINT ck_token_balances_balance_gte_0 CHECK (balance >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_token_balances_account ON token_balances (account);")
    for table in ("token_ledgers", "token_balances"):
        op.execute(f"""
            CREATE TRIGGER trg_{table}_updated_at
            BEFORE UPDATE ON {table}
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
        """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS token_balances CASCADE;")
    op.execute("DROP TABLE IF EXISTS token_ledgers CASCADE;")
