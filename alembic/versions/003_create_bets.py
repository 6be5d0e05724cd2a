"""003: create bets table

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
        CREATE TABLE bets (
            bet_id          VARCHAR(64)     PRIMARY KEY,
            market_id       VARCHAR(64)     NOT NULL
                REFERENCES markets (id) ON UPDATE CASCADE,
            user_id         VARCHAR(128)    NOT NULL,
            amount          BIGINT          NOT NULL,
            outcome         TEXT            NOT NULL,
            date            TEXT            NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_bets_amount_gt_0 CHECK (amount > 0)
        );
    """)
    op.execute("CREATE INDEX idx_bets_user ON bets (user_id);")
    op.execute("CREATE INDEX idx_bets_market ON bets (market_id);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS bets CASCADE;")
