"""Tests for the bet id generator."""

from unittest.mock import patch

from src.pm_common.id_generator import BetIdGenerator, generate_bet_id


class TestBetIdGenerator:
    def test_ids_are_decimal_strings(self) -> None:
        assert generate_bet_id().isdigit()

    def test_unique_and_increasing(self) -> None:
        gen = BetIdGenerator()
        ids = [int(gen.next_id()) for _ in range(2000)]
        assert ids == sorted(ids)
        assert len(set(ids)) == len(ids)

    def test_same_millisecond_still_unique(self) -> None:
        gen = BetIdGenerator()
        with patch.object(gen, "_current_ms", return_value=1_760_000_000_000):
            first, second = gen.next_id(), gen.next_id()
        assert int(second) == int(first) + 1

    def test_clock_going_backwards_keeps_increasing(self) -> None:
        gen = BetIdGenerator()
        with patch.object(gen, "_current_ms", return_value=1_760_000_000_500):
            later = int(gen.next_id())
        with patch.object(gen, "_current_ms", return_value=1_760_000_000_000):
            earlier_clock = int(gen.next_id())
        assert earlier_clock > later
