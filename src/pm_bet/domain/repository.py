"""Repository Protocol for bets."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_bet.domain.models import Bet


class BetRepositoryProtocol(Protocol):
    async def insert_bet(
        self,
        db: AsyncSession,
        bet_id: str,
        market_id: str,
        user_id: str,
        amount: int,
        outcome: str,
        date: str,
    ) -> Bet: ...

    async def list_bets_by_user(self, db: AsyncSession, user_id: str) -> list[Bet]: ...

    async def list_bets_by_market(self, db: AsyncSession, market_id: str) -> list[Bet]: ...
