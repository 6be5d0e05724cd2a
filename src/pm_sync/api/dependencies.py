"""FastAPI dependency: the process-wide Reconciler.

A single instance per process so its lock serialises every caller.
Tests override get_reconciler via app.dependency_overrides.
"""

from src.pm_ledger.infrastructure.starknet_reader import build_ledger_reader
from src.pm_sync.application.reconciler import Reconciler

_reconciler: Reconciler | None = None


def get_reconciler() -> Reconciler:
    global _reconciler  # noqa: PLW0603
    if _reconciler is None:
        _reconciler = Reconciler(build_ledger_reader())
    return _reconciler
