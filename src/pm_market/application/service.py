"""MarketApplicationService — market creation and read paths.

save_market owns its transaction (commit/rollback); reads run without one.
next_market_id is read-only: the router runs a reconciliation pass first.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_bet.domain.repository import BetRepositoryProtocol
from src.pm_bet.infrastructure.persistence import BetRepository
from src.pm_common.errors import LocalStoreError, MarketAlreadyExistsError, MarketNotFoundError
from src.pm_market.application.schemas import (
    MarketDetail,
    MarketItem,
    MarketListResponse,
    NextMarketIdResponse,
    SaveMarketRequest,
)
from src.pm_market.domain.models import NewMarket
from src.pm_market.domain.repository import MarketRepositoryProtocol
from src.pm_market.infrastructure.persistence import MarketRepository

logger = logging.getLogger(__name__)


class MarketApplicationService:
    def __init__(
        self,
        repo: MarketRepositoryProtocol | None = None,
        bet_repo: BetRepositoryProtocol | None = None,
    ) -> None:
        self._repo: MarketRepositoryProtocol = repo or MarketRepository()
        self._bet_repo: BetRepositoryProtocol = bet_repo or BetRepository()

    async def save_market(self, db: AsyncSession, req: SaveMarketRequest) -> MarketItem:
        new_market = NewMarket(
            id=req.id,
            title=req.title,
            description=req.description,
            expiration=req.expiration,
            creator=req.creator,
        )
        try:
            market = await self._repo.insert_market(db, new_market)
            if market is None:
                raise MarketAlreadyExistsError(req.id)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Failed to save market %s: %s", req.id, e)
            raise LocalStoreError(str(e)) from e
        except Exception:
            await db.rollback()
            raise
        logger.info("Market %s saved (unverified)", market.id)
        return MarketItem.from_domain(market)

    async def list_markets(self, db: AsyncSession) -> MarketListResponse:
        markets = await self._repo.list_markets(db)
        return MarketListResponse(items=[MarketItem.from_domain(m) for m in markets])

    async def get_market(self, db: AsyncSession, market_id: str) -> MarketDetail:
        market = await self._repo.get_market_by_id(db, market_id)
        if market is None:
            raise MarketNotFoundError(market_id)
        bets = await self._bet_repo.list_bets_by_market(db, market_id)
        return MarketDetail.from_domain_with_bets(market, bets)

    async def next_market_id(self, db: AsyncSession) -> NextMarketIdResponse:
        max_id = await self._repo.get_max_numeric_id(db)
        next_id = "1" if max_id is None else str(max_id + 1)
        return NextMarketIdResponse(next_id=next_id)
