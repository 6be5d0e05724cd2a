# src/pm_market/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_ledger.domain.models import LedgerQuestion
from src.pm_market.domain.models import Market, NewMarket, PendingMarket


class MarketRepositoryProtocol(Protocol):
    # --- reconciliation accessors ---

    async def claim_first_unverified(
        self, db: AsyncSession
    ) -> PendingMarket | None: ...

    async def mark_verified(
        self, db: AsyncSession, row_id: int, question: LedgerQuestion
    ) -> bool: ...

    async def renumber(
        self, db: AsyncSession, row_id: int, new_id: str
    ) -> bool: ...

    async def get_max_numeric_id(self, db: AsyncSession) -> int | None: ...

    # --- CRUD ---

    async def get_market_by_id(
        self, db: AsyncSession, market_id: str
    ) -> Market | None: ...

    async def list_markets(self, db: AsyncSession) -> list[Market]: ...

    async def insert_market(
        self, db: AsyncSession, market: NewMarket
    ) -> Market | None: ...

    async def add_to_total(
        self, db: AsyncSession, market_id: str, amount: int
    ) -> bool: ...
