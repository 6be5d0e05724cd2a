"""Pydantic schemas for pm_market API."""

from pydantic import BaseModel, Field

from src.pm_bet.application.schemas import BetItem
from src.pm_bet.domain.models import Bet
from src.pm_market.domain.models import Market

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class SaveMarketRequest(BaseModel):
    id: str = Field(..., min_length=1, max_length=64, description="Provisional market id")
    title: str = Field(..., min_length=1)
    description: str | None = None
    expiration: str = Field(..., min_length=1)
    creator: str = Field(..., min_length=1, description="Creator account address")


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class MarketItem(BaseModel):
    id: str
    title: str
    description: str | None
    expiration: str
    creator: str
    total_amount: int
    is_expired: bool
    is_verified: bool

    @classmethod
    def from_domain(cls, m: Market) -> "MarketItem":
        return cls(
            id=m.id,
            title=m.title,
            description=m.description,
            expiration=m.expiration,
            creator=m.creator,
            total_amount=m.total_amount,
            is_expired=m.is_expired,
            is_verified=m.is_verified,
        )


class MarketDetail(MarketItem):
    bets: list[BetItem]
    total_bet_amount: int

    @classmethod
    def from_domain_with_bets(cls, m: Market, bets: list[Bet]) -> "MarketDetail":
        base = MarketItem.from_domain(m)
        return cls(
            **base.model_dump(),
            bets=[BetItem.from_domain(b) for b in bets],
            total_bet_amount=sum(b.amount for b in bets),
        )


class MarketListResponse(BaseModel):
    items: list[MarketItem]


class NextMarketIdResponse(BaseModel):
    next_id: str
