"""
hospital/ids.py

Timestamp-based identifiers that never repeat within a process.
"""

from __future__ import annotations

import time
from typing import Callable, Iterable


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class IdGenerator:
    """
    Issues ids as decimal strings of epoch milliseconds.

    If the clock has not moved past the last issued value, the next id is
    ``last + 1``, so ids are strictly increasing even for calls inside the
    same millisecond or after the clock steps backwards.
    """

    def __init__(self, clock: Callable[[], int] = _epoch_millis):
        self._clock = clock
        self._last = 0

    def next_id(self) -> str:
        self._last = max(self._clock(), self._last + 1)
        return str(self._last)

    def observe(self, ids: Iterable[str]) -> None:
        """Never issue any numeric id in *ids* again."""
        for value in ids:
            if value.isdigit():
                self._last = max(self._last, int(value))
