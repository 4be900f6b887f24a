"""001: create common trigger functions

Revision ID: 001
Revises: 
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_touch_updated_at()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    # Settlement is terminal: a settled row keeps its outcome and final price.
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_guard_settlement_final()
        RETURNS TRIGGER AS $$
        BEGIN
            IF OLD.settled AND (
                NOT NEW.settled
                OR NEW.winning_outcome IS DISTINCT FROM OLD.winning_outcome
                OR NEW.final_price IS DISTINCT FROM OLD.final_price
            ) THEN
                RAISE EXCEPTION 'market % is already settled', OLD.id;
            END IF;
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)


def downgrade() -> None:
    op.execute("DROP FUNCTION IF EXISTS fn_guard_settlement_final();")
    op.execute("DROP FUNCTION IF EXISTS fn_touch_updated_at();")
