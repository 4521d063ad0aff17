"""Time source abstraction.

Every component that stamps ``last_seen``/``first_seen`` or formats
durations takes a :data:`Clock` so tests can pin time.
"""

from __future__ import annotations

import time
from collections.abc import Callable

Clock = Callable[[], int]
"""Zero-argument callable returning epoch milliseconds."""


def now_ms() -> int:
    """Current epoch timestamp in milliseconds."""
    return int(time.time() * 1000)


class ManualClock:
    """A clock that only moves when told to.

    Handy for deterministic simulations and replaying scenarios.
    """

    def __init__(self, start_ms: int = 0) -> None:
        self._now = int(start_ms)

    def __call__(self) -> int:
        return self._now

    def advance(self, ms: int) -> int:
        if ms < 0:
            raise ValueError("ManualClock cannot move backwards")
        self._now += int(ms)
        return self._now
