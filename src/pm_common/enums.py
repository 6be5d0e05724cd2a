"""Global enums."""

from enum import Enum


class ReconcileOutcomeKind(str, Enum):
    """Discriminator for the three results of one reconciliation pass."""
    NO_PENDING_RECORD = "NO_PENDING_RECORD"
    VERIFIED = "VERIFIED"
    UNMATCHED = "UNMATCHED"
