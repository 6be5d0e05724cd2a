"""Pure matching rules over a ledger snapshot."""

from collections.abc import Sequence

from src.pm_ledger.domain.models import LedgerQuestion


def find_match(
    questions: Sequence[LedgerQuestion], fingerprint: int
) -> LedgerQuestion | None:
    """First question in snapshot order whose fingerprint equals `fingerprint`."""
    for question in questions:
        if question.fingerprint == fingerprint:
            return question
    return None


def suggest_next_id(questions: Sequence[LedgerQuestion]) -> str:
    """Identity the next on-chain question is expected to get.

    Trusts the snapshot's last element to carry the highest identity; the
    ordering is not checked.
    """
    last_id = int(questions[-1].identity, 10) if questions else 0
    return str(last_id + 1)
