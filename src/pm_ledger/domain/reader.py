# src/pm_ledger/domain/reader.py
"""Reader Protocol — the reconciler depends on this, not on Starknet.

Unit tests inject an AsyncMock conforming to this Protocol.
"""

from typing import Protocol

from src.pm_ledger.domain.models import LedgerQuestion


class LedgerReaderProtocol(Protocol):
    async def fetch_questions(self) -> list[LedgerQuestion]:
        """Return the full on-chain question list in ledger order.

        Raises LedgerTransportError when the ledger cannot be read.
        """
        ...
