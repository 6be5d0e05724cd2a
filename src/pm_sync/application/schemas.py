"""Pydantic schemas for pm_sync API."""

from pydantic import BaseModel

from src.pm_common.enums import ReconcileOutcomeKind
from src.pm_sync.domain.outcome import ReconcileOutcome, Unmatched, Verified


class ReconcileResponse(BaseModel):
    kind: ReconcileOutcomeKind
    market_id: str | None = None
    previous_id: str | None = None
    written: bool

    @classmethod
    def from_outcome(cls, outcome: ReconcileOutcome) -> "ReconcileResponse":
        if isinstance(outcome, Verified):
            return cls(
                kind=outcome.kind,
                market_id=outcome.new_id,
                previous_id=outcome.previous_id,
                written=True,
            )
        if isinstance(outcome, Unmatched):
            return cls(
                kind=outcome.kind,
                market_id=outcome.suggested_id,
                previous_id=outcome.previous_id,
                written=outcome.written,
            )
        return cls(kind=outcome.kind, written=False)
