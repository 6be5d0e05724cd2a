"""Time-ordered string IDs for bets.

IDs are decimal strings of ``epoch_ms * 1000 + counter``: sortable, unique
within a process even when several bets land in the same millisecond.
"""

import threading
import time


class BetIdGenerator:
    _PER_MS = 1000

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            candidate = self._current_ms() * self._PER_MS
            # Clock stood still or went backwards: keep counting from the last id
            self._last = max(candidate, self._last + 1)
            return str(self._last)

    def _current_ms(self) -> int:
        return time.time_ns() // 1_000_000


_default_generator = BetIdGenerator()


def generate_bet_id() -> str:
    return _default_generator.next_id()
