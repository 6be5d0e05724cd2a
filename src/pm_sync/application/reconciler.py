"""Reconciler — maps the oldest unverified market onto the on-chain question list.

One call = one ledger fetch, at most one claimed market, at most one UPDATE,
one commit. Order matters: the ledger is fetched before the database is
touched, so a transport failure leaves no trace locally.

Serialisation:
  - in-process: an asyncio.Lock held for the whole call;
  - across processes: the claim query takes FOR UPDATE SKIP LOCKED, so two
    passes never work on the same market concurrently.

Renumbering to an id another row already holds fails on the primary key and
surfaces as LocalStoreError; the market stays unverified.
"""

import asyncio
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.errors import LocalStoreError
from src.pm_ledger.domain.models import LedgerQuestion
from src.pm_ledger.domain.reader import LedgerReaderProtocol
from src.pm_market.domain.repository import MarketRepositoryProtocol
from src.pm_market.infrastructure.persistence import MarketRepository
from src.pm_sync.domain.fingerprint import format_fingerprint, title_fingerprint
from src.pm_sync.domain.matching import find_match, suggest_next_id
from src.pm_sync.domain.outcome import (
    NoPendingRecord,
    ReconcileOutcome,
    Unmatched,
    Verified,
)

logger = logging.getLogger(__name__)


class Reconciler:
    def __init__(
        self,
        reader: LedgerReaderProtocol,
        repo: MarketRepositoryProtocol | None = None,
    ) -> None:
        self._reader = reader
        self._repo: MarketRepositoryProtocol = repo or MarketRepository()
        self._lock = asyncio.Lock()

    async def reconcile_one(self, db: AsyncSession) -> ReconcileOutcome:
        async with self._lock:
            # LedgerTransportError propagates untouched: nothing read, nothing written
            questions = await self._reader.fetch_questions()
            logger.info("Ledger snapshot: %d questions", len(questions))

            try:
                outcome = await self._apply(db, questions)
                await db.commit()
            except SQLAlchemyError as e:
                await db.rollback()
                logger.error("Reconciliation aborted by storage error: %s", e)
                raise LocalStoreError(str(e)) from e
            except Exception:
                await db.rollback()
                raise

        logger.info("Reconciliation outcome: %s", outcome)
        return outcome

    async def _apply(
        self, db: AsyncSession, questions: list[LedgerQuestion]
    ) -> ReconcileOutcome:
        pending = await self._repo.claim_first_unverified(db)
        if pending is None:
            return NoPendingRecord()

        fingerprint = title_fingerprint(pending.title)
        logger.info(
            "Reconciling market %s (row %d) fingerprint=%s",
            pending.id,
            pending.row_id,
            format_fingerprint(fingerprint),
        )

        match = find_match(questions, fingerprint)
        if match is not None:
            if not await self._repo.mark_verified(db, pending.row_id, match):
                raise LocalStoreError(f"market row {pending.row_id} changed during reconciliation")
            return Verified(new_id=match.identity, previous_id=pending.id)

        suggested = suggest_next_id(questions)
        if suggested == pending.id:
            return Unmatched(suggested_id=suggested, written=False, previous_id=pending.id)

        if not await self._repo.renumber(db, pending.row_id, suggested):
            raise LocalStoreError(f"market row {pending.row_id} changed during reconciliation")
        return Unmatched(suggested_id=suggested, written=True, previous_id=pending.id)
