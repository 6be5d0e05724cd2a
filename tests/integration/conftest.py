"""Integration-test fixtures.

Requires a migrated PostgreSQL (alembic upgrade head) at DATABASE_URL and
PM_INTEGRATION=1. The ledger is replaced by an in-memory reader; the
database is real.
"""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client — keeps the engine pool alive."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
