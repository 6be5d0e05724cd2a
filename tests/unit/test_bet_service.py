# tests/unit/test_bet_service.py
"""Unit tests for BetApplicationService and BetRepository."""
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from src.pm_bet.application.schemas import SaveBetRequest
from src.pm_bet.application.service import BetApplicationService
from src.pm_bet.domain.models import Bet
from src.pm_bet.infrastructure.persistence import BetRepository
from src.pm_common.errors import MarketNotFoundError


def _make_bet(**kwargs) -> Bet:
    defaults = dict(
        bet_id="1760000000000000", market_id="42", user_id="0xuser", amount=100,
        outcome="YES", date="2026-10-18", created_at=datetime.now(UTC),
    )
    defaults.update(kwargs)
    return Bet(**defaults)


def _request(**kwargs) -> SaveBetRequest:
    defaults = dict(user_id="0xuser", market_id="42", amount=100, outcome="YES", date="2026-10-18")
    defaults.update(kwargs)
    return SaveBetRequest(**defaults)


@pytest.fixture
def db():
    return AsyncMock()


class TestSaveBetRequest:
    def test_rejects_zero_amount(self) -> None:
        with pytest.raises(ValidationError):
            _request(amount=0)

    def test_rejects_negative_amount(self) -> None:
        with pytest.raises(ValidationError):
            _request(amount=-5)

    def test_rejects_missing_outcome(self) -> None:
        with pytest.raises(ValidationError):
            SaveBetRequest(user_id="u", market_id="m", amount=1, date="d")


class TestSaveBet:
    @pytest.mark.asyncio
    async def test_bumps_total_then_inserts_and_commits(self, db):
        bet_repo = MagicMock()
        bet_repo.insert_bet = AsyncMock(return_value=_make_bet())
        market_repo = MagicMock()
        market_repo.add_to_total = AsyncMock(return_value=True)
        svc = BetApplicationService(repo=bet_repo, market_repo=market_repo)

        item = await svc.save_bet(db, _request())

        market_repo.add_to_total.assert_awaited_once_with(db, "42", 100)
        kwargs = bet_repo.insert_bet.call_args.kwargs
        assert kwargs["market_id"] == "42"
        assert kwargs["amount"] == 100
        assert kwargs["bet_id"].isdigit()
        assert item.market_id == "42"
        db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_market_inserts_nothing(self, db):
        bet_repo = MagicMock()
        bet_repo.insert_bet = AsyncMock()
        market_repo = MagicMock()
        market_repo.add_to_total = AsyncMock(return_value=False)
        svc = BetApplicationService(repo=bet_repo, market_repo=market_repo)

        with pytest.raises(MarketNotFoundError):
            await svc.save_bet(db, _request(market_id="missing"))

        bet_repo.insert_bet.assert_not_awaited()
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()


class TestListUserBets:
    @pytest.mark.asyncio
    async def test_returns_user_bets(self, db):
        bet_repo = MagicMock()
        bet_repo.list_bets_by_user = AsyncMock(
            return_value=[_make_bet(bet_id="1"), _make_bet(bet_id="2", amount=50)]
        )
        svc = BetApplicationService(repo=bet_repo, market_repo=MagicMock())

        resp = await svc.list_user_bets(db, "0xuser")

        assert resp.user_id == "0xuser"
        assert [b.amount for b in resp.bets] == [100, 50]


class TestBetRepository:
    @pytest.mark.asyncio
    async def test_insert_bet_maps_returned_row(self):
        row = MagicMock(
            bet_id="b1", market_id="42", user_id="u", amount=10,
            outcome="NO", date="2026-10-18", created_at=datetime.now(UTC),
        )
        result = MagicMock()
        result.fetchone.return_value = row
        db = MagicMock()
        db.execute = AsyncMock(return_value=result)

        bet = await BetRepository().insert_bet(
            db, bet_id="b1", market_id="42", user_id="u", amount=10, outcome="NO", date="2026-10-18"
        )

        assert bet.bet_id == "b1"
        assert bet.outcome == "NO"

    @pytest.mark.asyncio
    async def test_list_bets_by_market(self):
        result = MagicMock()
        result.fetchall.return_value = []
        db = MagicMock()
        db.execute = AsyncMock(return_value=result)

        assert await BetRepository().list_bets_by_market(db, "42") == []
        assert db.execute.call_args.args[1] == {"market_id": "42"}
