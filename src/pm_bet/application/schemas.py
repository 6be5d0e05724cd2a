"""Pydantic schemas for pm_bet API."""

from pydantic import BaseModel, Field

from src.pm_bet.domain.models import Bet


class SaveBetRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    market_id: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0, description="Bet amount, must be greater than 0")
    outcome: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)


class BetItem(BaseModel):
    bet_id: str
    market_id: str
    user_id: str
    amount: int
    outcome: str
    date: str

    @classmethod
    def from_domain(cls, b: Bet) -> "BetItem":
        return cls(
            bet_id=b.bet_id,
            market_id=b.market_id,
            user_id=b.user_id,
            amount=b.amount,
            outcome=b.outcome,
            date=b.date,
        )


class UserBetsResponse(BaseModel):
    user_id: str
    bets: list[BetItem]
