"""Fixed-rate tick schedule that drops deadlines missed during an overrun."""

from __future__ import annotations

import time
from typing import Callable


class Ticker:
    """Deadlines at ``start + k * interval`` for k = 1, 2, ...

    The first deadline is one full interval after construction. When work
    runs past one or more deadlines, ``advance`` skips them instead of firing
    them back to back.
    """

    def __init__(
        self, interval: float, monotonic: Callable[[], float] = time.monotonic
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self._monotonic = monotonic
        self._next = monotonic() + interval

    @property
    def deadline(self) -> float:
        return self._next

    def delay(self) -> float:
        """Seconds until the next deadline, never negative."""
        return max(0.0, self._next - self._monotonic())

    def advance(self) -> int:
        """Move to the next deadline still in the future.

        Returns the number of deadlines that were skipped.
        """
        now = self._monotonic()
        self._next += self.interval
        skipped = 0
        while self._next <= now:
            self._next += self.interval
            skipped += 1
        return skipped
