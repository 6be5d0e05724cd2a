"""BetApplicationService — bet placement and per-user bet queries.

save_bet bumps the market's total_amount and inserts the bet in one
transaction; the total is bumped first so an unknown market fails before
anything is inserted.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_bet.application.schemas import BetItem, SaveBetRequest, UserBetsResponse
from src.pm_bet.domain.repository import BetRepositoryProtocol
from src.pm_bet.infrastructure.persistence import BetRepository
from src.pm_common.errors import LocalStoreError, MarketNotFoundError
from src.pm_common.id_generator import generate_bet_id
from src.pm_market.domain.repository import MarketRepositoryProtocol
from src.pm_market.infrastructure.persistence import MarketRepository

logger = logging.getLogger(__name__)


class BetApplicationService:
    def __init__(
        self,
        repo: BetRepositoryProtocol | None = None,
        market_repo: MarketRepositoryProtocol | None = None,
    ) -> None:
        self._repo: BetRepositoryProtocol = repo or BetRepository()
        self._market_repo: MarketRepositoryProtocol = market_repo or MarketRepository()

    async def save_bet(self, db: AsyncSession, req: SaveBetRequest) -> BetItem:
        try:
            found = await self._market_repo.add_to_total(db, req.market_id, req.amount)
            if not found:
                raise MarketNotFoundError(req.market_id)
            bet = await self._repo.insert_bet(
                db,
                bet_id=generate_bet_id(),
                market_id=req.market_id,
                user_id=req.user_id,
                amount=req.amount,
                outcome=req.outcome,
                date=req.date,
            )
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Failed to save bet on market %s: %s", req.market_id, e)
            raise LocalStoreError(str(e)) from e
        except Exception:
            await db.rollback()
            raise
        logger.info("Bet %s saved: market=%s amount=%d", bet.bet_id, bet.market_id, bet.amount)
        return BetItem.from_domain(bet)

    async def list_user_bets(self, db: AsyncSession, user_id: str) -> UserBetsResponse:
        bets = await self._repo.list_bets_by_user(db, user_id)
        return UserBetsResponse(
            user_id=user_id, bets=[BetItem.from_domain(b) for b in bets]
        )
