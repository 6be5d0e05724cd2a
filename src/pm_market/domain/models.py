"""Domain models for pm_market — pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Market:
    row_id: int
    id: str
    title: str
    description: str | None
    expiration: str
    creator: str
    total_amount: int
    is_expired: bool
    is_verified: bool
    created_at: datetime
    updated_at: datetime


@dataclass
class PendingMarket:
    """The slice of an unverified market the reconciler needs.

    row_id is the stable handle; id may be rewritten under it.
    """

    row_id: int
    id: str
    title: str


@dataclass
class NewMarket:
    id: str
    title: str
    description: str | None
    expiration: str
    creator: str
