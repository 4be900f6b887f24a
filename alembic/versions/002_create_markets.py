"""002: create markets table

Revision ID: 002
Revises: 001
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("CREATE SEQUENCE markets_id_seq START WITH 1 INCREMENT BY 1 NO CYCLE;")
    # created_at / settlement_time are unix seconds; amounts are 1e18-scaled.
    # Per-outcome arrays are indexed PUMP, DUMP, NO_CHANGE, RUG, MOON.
    op.execute("""
        CREATE TABLE markets (
            id                  BIGINT              PRIMARY KEY,
            creator             VARCHAR(128)        NOT NULL,
            token_address       VARCHAR(128)        NOT NULL,
            initial_price       NUMERIC(78, 0)      NOT NULL,
            created_at          BIGINT              NOT NULL,
            settlement_time     BIGINT              NOT NULL,
            settled             BOOLEAN             NOT NULL DEFAULT FALSE,
            winning_outcome     VARCHAR(10),
            final_price         NUMERIC(78, 0),
            total_shares        NUMERIC(78, 0)[]    NOT NULL,
            total_volume        NUMERIC(78, 0)[]    NOT NULL,
            position_tokens     VARCHAR(128)[]      NOT NULL,
            inserted_at         TIMESTAMPTZ         NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ         NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_markets_initial_price_gt_0  CHECK (initial_price > 0),
            CONSTRAINT ck_markets_settlement_after    CHECK (settlement_time > created_at),
            CONSTRAINT ck_markets_outcome_slots CHECK (
                cardinality(total_shares) = 5
                AND cardinality(total_volume) = 5
                AND cardinality(position_tokens) = 5
            ),
            CONSTRAINT ck_markets_shares_gte_0  CHECK (0 <= ALL(total_shares)),
            CONSTRAINT ck_markets_volume_gte_0  CHECK (0 <= ALL(total_volume)),
            CONSTRAINT ck_markets_winning_outcome CHECK (
                winning_outcome IS NULL
                OR winning_outcome IN ('PUMP', 'DUMP', 'NO_CHANGE', 'RUG', 'MOON')
            ),
            CONSTRAINT ck_markets_settled_consistency CHECK (
                (settled AND winning_outcome IS NOT NULL AND final_price IS NOT NULL)
                OR (NOT settled AND winning_outcome IS NULL AND final_price IS NULL)
            )
        );
    """)
    op.execute("ALTER SEQUENCE markets_id_seq OWNED BY markets.id;")
    op.execute("CREATE INDEX idx_markets_unsettled ON markets (settlement_time) WHERE NOT settled;")
    op.execute("CREATE INDEX idx_markets_creator ON markets (creator);")
    op.execute("""
        CREATE TRIGGER trg_markets_updated_at
        BEFORE UPDATE ON markets
        FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)
    op.execute("""
        CREATE TRIGGER trg_markets_settlement_final
        BEFORE UPDATE ON markets
        FOR EACH ROW EXECUTE FUNCTION fn_guard_settlement_final();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS markets CASCADE;")
    op.execute("DROP SEQUENCE IF EXISTS markets_id_seq;")
