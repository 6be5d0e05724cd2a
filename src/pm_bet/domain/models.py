"""Domain models for pm_bet."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Bet:
    bet_id: str
    market_id: str
    user_id: str
    amount: int
    outcome: str
    date: str
    created_at: datetime
