"""MarketRepository — concrete implementation of MarketRepositoryProtocol.

All queries use raw text() SQL (no ORM).
Updates are keyed by row_id, never by id: the reconciler rewrites id itself.
Transaction ownership: the CALLER commits or rolls back.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_ledger.domain.models import LedgerQuestion
from src.pm_market.domain.models import Market, NewMarket, PendingMarket

# ---------------------------------------------------------------------------
# SQL: reconciliation
# ---------------------------------------------------------------------------

# SKIP LOCKED: a concurrent pass in another process claims the next row or none.
_CLAIM_FIRST_UNVERIFIED_SQL = text("""
    SELECT row_id, id, title
    FROM markets
    WHERE is_verified = FALSE
    ORDER BY row_id
    LIMIT 1
    FOR UPDATE SKIP LOCKED
""")

_MARK_VERIFIED_SQL = text("""
    UPDATE markets
    SET id = :new_id,
        expiration = :expiration,
        creator = :creator,
        total_amount = :total_amount,
        is_verified = TRUE,
        updated_at = NOW()
    WHERE row_id = :row_id AND is_verified = FALSE
    RETURNING row_id
""")

_RENUMBER_SQL = text("""
    UPDATE markets
    SET id = :new_id,
        updated_at = NOW()
    WHERE row_id = :row_id AND is_verified = FALSE
    RETURNING row_id
""")

_MAX_NUMERIC_ID_SQL = text("""
    SELECT MAX(CAST(id AS NUMERIC)) AS max_id
    FROM markets
    WHERE id ~ '^[0-9]+$'
""")

# ---------------------------------------------------------------------------
# SQL: CRUD
# ---------------------------------------------------------------------------

_MARKET_COLUMNS = """
    row_id, id, title, description, expiration, creator,
    total_amount, is_expired, is_verified, created_at, updated_at
"""

_GET_MARKET_SQL = text(f"""
    SELECT {_MARKET_COLUMNS}
    FROM markets
    WHERE id = :market_id
""")

_LIST_MARKETS_SQL = text(f"""
    SELECT {_MARKET_COLUMNS}
    FROM markets
    ORDER BY row_id
""")

# ON CONFLICT DO NOTHING: zero rows back means the id is already taken.
_INSERT_MARKET_SQL = text(f"""
    INSERT INTO markets (id, title, description, expiration, creator, total_amount)
    VALUES (:id, :title, :description, :expiration, :creator, 0)
    ON CONFLICT (id) DO NOTHING
    RETURNING {_MARKET_COLUMNS}
""")

_ADD_TO_TOTAL_SQL = text("""
    UPDATE markets
    SET total_amount = total_amount + :amount,
        updated_at = NOW()
    WHERE id = :market_id
    RETURNING row_id
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------

def _row_to_market(row: object) -> Market:
    return Market(
        row_id=row.row_id,  # type: ignore[attr-defined]
        id=row.id,  # type: ignore[attr-defined]
        title=row.title,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        expiration=row.expiration,  # type: ignore[attr-defined]
        creator=row.creator,  # type: ignore[attr-defined]
        total_amount=int(row.total_amount),  # type: ignore[attr-defined]
        is_expired=row.is_expired,  # type: ignore[attr-defined]
        is_verified=row.is_verified,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class MarketRepository:
    """Concrete repository over the markets table."""

    async def claim_first_unverified(self, db: AsyncSession) -> PendingMarket | None:
        result = await db.execute(_CLAIM_FIRST_UNVERIFIED_SQL)
        row = result.fetchone()
        if row is None:
            return None
        return PendingMarket(row_id=row.row_id, id=row.id, title=row.title)

    async def mark_verified(
        self, db: AsyncSession, row_id: int, question: LedgerQuestion
    ) -> bool:
        result = await db.execute(
            _MARK_VERIFIED_SQL,
            {
                "row_id": row_id,
                "new_id": question.identity,
                "expiration": question.expiration_time,
                "creator": question.creator_address,
                "total_amount": question.total_staked,
            },
        )
        return result.fetchone() is not None

    async def renumber(self, db: AsyncSession, row_id: int, new_id: str) -> bool:
        result = await db.execute(_RENUMBER_SQL, {"row_id": row_id, "new_id": new_id})
        return result.fetchone() is not None

    async def get_max_numeric_id(self, db: AsyncSession) -> int | None:
        result = await db.execute(_MAX_NUMERIC_ID_SQL)
        row = result.fetchone()
        if row is None or row.max_id is None:
            return None
        return int(row.max_id)

    async def get_market_by_id(
        self, db: AsyncSession, market_id: str
    ) -> Market | None:
        result = await db.execute(_GET_MARKET_SQL, {"market_id": market_id})
        row = result.fetchone()
        return _row_to_market(row) if row else None

    async def list_markets(self, db: AsyncSession) -> list[Market]:
        result = await db.execute(_LIST_MARKETS_SQL)
        return [_row_to_market(row) for row in result.fetchall()]

    async def insert_market(self, db: AsyncSession, market: NewMarket) -> Market | None:
        result = await db.execute(
            _INSERT_MARKET_SQL,
            {
                "id": market.id,
                "title": market.title,
                "description": market.description,
                "expiration": market.expiration,
                "creator": market.creator,
            },
        )
        row = result.fetchone()
        return _row_to_market(row) if row else None

    async def add_to_total(self, db: AsyncSession, market_id: str, amount: int) -> bool:
        result = await db.execute(
            _ADD_TO_TOTAL_SQL, {"market_id": market_id, "amount": amount}
        )
        return result.fetchone() is not None
