# tests/unit/test_market_service.py
"""Unit tests for MarketApplicationService using mock repositories."""
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.pm_bet.domain.models import Bet
from src.pm_common.errors import LocalStoreError, MarketAlreadyExistsError, MarketNotFoundError
from src.pm_market.application.schemas import SaveMarketRequest
from src.pm_market.application.service import MarketApplicationService
from src.pm_market.domain.models import Market


def _make_market(**kwargs) -> Market:
    defaults = dict(
        row_id=1, id="1", title="Will it rain?", description=None,
        expiration="1767225600", creator="0xabc", total_amount=0,
        is_expired=False, is_verified=False,
        created_at=datetime.now(UTC), updated_at=datetime.now(UTC),
    )
    defaults.update(kwargs)
    return Market(**defaults)


def _make_bet(amount: int, market_id: str = "1") -> Bet:
    return Bet(
        bet_id=f"b{amount}", market_id=market_id, user_id="0xuser", amount=amount,
        outcome="YES", date="2026-10-18", created_at=datetime.now(UTC),
    )


def _request(**kwargs) -> SaveMarketRequest:
    defaults = dict(id="1", title="Will it rain?", expiration="1767225600", creator="0xabc")
    defaults.update(kwargs)
    return SaveMarketRequest(**defaults)


@pytest.fixture
def db():
    return AsyncMock()


@pytest.fixture
def mock_repo():
    return MagicMock()


@pytest.fixture
def mock_bet_repo():
    return MagicMock()


class TestSaveMarket:
    @pytest.mark.asyncio
    async def test_saves_and_commits(self, db, mock_repo, mock_bet_repo):
        mock_repo.insert_market = AsyncMock(return_value=_make_market(id="3"))
        svc = MarketApplicationService(repo=mock_repo, bet_repo=mock_bet_repo)

        item = await svc.save_market(db, _request(id="3"))

        assert item.id == "3"
        assert item.total_amount == 0
        assert item.is_verified is False
        db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_existing_id_rejected(self, db, mock_repo, mock_bet_repo):
        mock_repo.insert_market = AsyncMock(return_value=None)
        svc = MarketApplicationService(repo=mock_repo, bet_repo=mock_bet_repo)

        with pytest.raises(MarketAlreadyExistsError) as exc_info:
            await svc.save_market(db, _request(id="3"))

        assert exc_info.value.http_status == 400
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_storage_failure_becomes_local_store_error(self, db, mock_repo, mock_bet_repo):
        mock_repo.insert_market = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("connection lost"))
        )
        svc = MarketApplicationService(repo=mock_repo, bet_repo=mock_bet_repo)

        with pytest.raises(LocalStoreError):
            await svc.save_market(db, _request())

        db.rollback.assert_awaited_once()


class TestGetMarket:
    @pytest.mark.asyncio
    async def test_detail_includes_bets_and_total(self, db, mock_repo, mock_bet_repo):
        mock_repo.get_market_by_id = AsyncMock(return_value=_make_market(id="42", total_amount=350))
        mock_bet_repo.list_bets_by_market = AsyncMock(
            return_value=[_make_bet(100, "42"), _make_bet(250, "42")]
        )
        svc = MarketApplicationService(repo=mock_repo, bet_repo=mock_bet_repo)

        detail = await svc.get_market(db, "42")

        assert detail.id == "42"
        assert len(detail.bets) == 2
        assert detail.total_bet_amount == 350

    @pytest.mark.asyncio
    async def test_raises_not_found(self, db, mock_repo, mock_bet_repo):
        mock_repo.get_market_by_id = AsyncMock(return_value=None)
        svc = MarketApplicationService(repo=mock_repo, bet_repo=mock_bet_repo)

        with pytest.raises(MarketNotFoundError):
            await svc.get_market(db, "missing")


class TestListMarkets:
    @pytest.mark.asyncio
    async def test_returns_all(self, db, mock_repo, mock_bet_repo):
        mock_repo.list_markets = AsyncMock(
            return_value=[_make_market(row_id=i, id=str(i)) for i in range(1, 4)]
        )
        svc = MarketApplicationService(repo=mock_repo, bet_repo=mock_bet_repo)

        resp = await svc.list_markets(db)

        assert [m.id for m in resp.items] == ["1", "2", "3"]

    @pytest.mark.asyncio
    async def test_empty(self, db, mock_repo, mock_bet_repo):
        mock_repo.list_markets = AsyncMock(return_value=[])
        svc = MarketApplicationService(repo=mock_repo, bet_repo=mock_bet_repo)

        assert (await svc.list_markets(db)).items == []


class TestNextMarketId:
    @pytest.mark.asyncio
    async def test_max_plus_one(self, db, mock_repo, mock_bet_repo):
        mock_repo.get_max_numeric_id = AsyncMock(return_value=8)
        svc = MarketApplicationService(repo=mock_repo, bet_repo=mock_bet_repo)

        assert (await svc.next_market_id(db)).next_id == "9"

    @pytest.mark.asyncio
    async def test_one_when_no_numeric_ids(self, db, mock_repo, mock_bet_repo):
        mock_repo.get_max_numeric_id = AsyncMock(return_value=None)
        svc = MarketApplicationService(repo=mock_repo, bet_repo=mock_bet_repo)

        assert (await svc.next_market_id(db)).next_id == "1"
