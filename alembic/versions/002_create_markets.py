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
    op.execute("""
        CREATE TABLE markets (
            row_id          BIGINT          GENERATED ALWAYS AS IDENTITY UNIQUE,
            id              VARCHAR(64)     PRIMARY KEY,
            title           TEXT            NOT NULL,
            description     TEXT,
            expiration      TEXT            NOT NULL,
            creator         TEXT            NOT NULL,
            total_amount    NUMERIC(78, 0)  NOT NULL DEFAULT 0,
            is_expired      BOOLEAN         NOT NULL DEFAULT FALSE,
            is_verified     BOOLEAN         NOT NULL DEFAULT FALSE,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_markets_total_amount_gte_0 CHECK (total_amount >= 0)
        );
    """)
    # Reconciler claims the oldest unverified row
    op.execute("""
        CREATE INDEX idx_markets_unverified
        ON markets (row_id)
        WHERE is_verified = FALSE;
    """)
    op.execute("""
        CREATE TRIGGER trg_markets_updated_at
            BEFORE UPDATE ON markets
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    # Once verified, id is frozen
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_markets_verified_guard()
        RETURNS TRIGGER AS $$
        BEGIN
            IF OLD.is_verified AND (NOT NEW.is_verified OR NEW.id <> OLD.id) THEN
                RAISE EXCEPTION 'market % is verified; id and is_verified are frozen', OLD.id;
            END IF;
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute("""
        CREATE TRIGGER trg_markets_verified_guard
            BEFORE UPDATE ON markets
            FOR EACH ROW EXECUTE FUNCTION fn_markets_verified_guard();
    """)
    op.execute("COMMENT ON TABLE markets IS 'Prediction questions; id is rewritten by reconciliation until is_verified';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS markets CASCADE;")
    op.execute("DROP FUNCTION IF EXISTS fn_markets_verified_guard();")
