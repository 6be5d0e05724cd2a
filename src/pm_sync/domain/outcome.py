"""Result of one reconciliation pass — a closed union of three frozen dataclasses."""

from dataclasses import dataclass, field

from src.pm_common.enums import ReconcileOutcomeKind


@dataclass(frozen=True)
class NoPendingRecord:
    kind: ReconcileOutcomeKind = field(
        default=ReconcileOutcomeKind.NO_PENDING_RECORD, init=False
    )


@dataclass(frozen=True)
class Verified:
    """The pending market matched a ledger question and now carries its id."""

    new_id: str
    previous_id: str
    kind: ReconcileOutcomeKind = field(default=ReconcileOutcomeKind.VERIFIED, init=False)


@dataclass(frozen=True)
class Unmatched:
    """No ledger question matched; written is False when the id was already the suggestion."""

    suggested_id: str
    written: bool
    previous_id: str
    kind: ReconcileOutcomeKind = field(default=ReconcileOutcomeKind.UNMATCHED, init=False)


ReconcileOutcome = NoPendingRecord | Verified | Unmatched
