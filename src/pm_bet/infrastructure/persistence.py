"""BetRepository — raw text() SQL over the bets table.

bets.market_id references markets.id with ON UPDATE CASCADE, so bets follow
a market through reconciliation renumbering.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_bet.domain.models import Bet
from src.pm_common.errors import InternalError

_BET_COLUMNS = "bet_id, market_id, user_id, amount, outcome, date, created_at"

_INSERT_BET_SQL = text(f"""
    INSERT INTO bets (bet_id, market_id, user_id, amount, outcome, date)
    VALUES (:bet_id, :market_id, :user_id, :amount, :outcome, :date)
    RETURNING {_BET_COLUMNS}
""")

_LIST_BY_USER_SQL = text(f"""
    SELECT {_BET_COLUMNS}
    FROM bets
    WHERE user_id = :user_id
    ORDER BY created_at, bet_id
""")

_LIST_BY_MARKET_SQL = text(f"""
    SELECT {_BET_COLUMNS}
    FROM bets
    WHERE market_id = :market_id
    ORDER BY created_at, bet_id
""")


def _row_to_bet(row: object) -> Bet:
    return Bet(
        bet_id=row.bet_id,  # type: ignore[attr-defined]
        market_id=row.market_id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        outcome=row.outcome,  # type: ignore[attr-defined]
        date=row.date,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class BetRepository:
    async def insert_bet(
        self,
        db: AsyncSession,
        bet_id: str,
        market_id: str,
        user_id: str,
        amount: int,
        outcome: str,
        date: str,
    ) -> Bet:
        result = await db.execute(
            _INSERT_BET_SQL,
            {
                "bet_id": bet_id,
                "market_id": market_id,
                "user_id": user_id,
                "amount": amount,
                "outcome": outcome,
                "date": date,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("INSERT bets returned no row")
        return _row_to_bet(row)

    async def list_bets_by_user(self, db: AsyncSession, user_id: str) -> list[Bet]:
        result = await db.execute(_LIST_BY_USER_SQL, {"user_id": user_id})
        return [_row_to_bet(row) for row in result.fetchall()]

    async def list_bets_by_market(self, db: AsyncSession, market_id: str) -> list[Bet]:
        result = await db.execute(_LIST_BY_MARKET_SQL, {"market_id": market_id})
        return [_row_to_bet(row) for row in result.fetchall()]
