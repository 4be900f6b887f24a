"""005: create market events

Revision ID: 005
Revises: 004
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Append-only notification log; market_id is NULL for registry-level events
    op.execute("""
        CREATE TABLE market_events (
            id              BIGSERIAL       PRIMARY KEY,
            market_id       BIGINT,
            event_type      VARCHAR(40)     NOT NULL,
            payload         JSONB           NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_market_events_type CHECK (
                event_type IN (
                    'MARKET_CREATED', 'SHARES_PURCHASED', 'SHARES_SOLD', 'FEES_PAID',
                    'MARKET_SETTLED', 'BATCH_SETTLEMENT', 'WINNINGS_CLAIMED',
                    'BOT_AUTHORIZED', 'PROTOCOL_TOKEN_CLAIMED', 'PROTOCOL_TOKEN_DEPOSITED'
                )
            )
        );
    """)
    op.execute("CREATE INDEX idx_market_events_market ON market_events (market_id, id);")
    op.execute("CREATE INDEX idx_market_events_type ON market_events (event_type, created_at);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS market_events;")
