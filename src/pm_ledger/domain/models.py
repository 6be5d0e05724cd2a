"""Domain models for pm_ledger — read-only view of the on-chain question list."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LedgerQuestion:
    """One entry of the contract's `list()` result.

    identity is normalised to the decimal string form used as the local
    market id; fingerprint is the u128 title hash committed at creation.
    """

    identity: str
    fingerprint: int
    expiration_time: str
    creator_address: str
    total_staked: int
