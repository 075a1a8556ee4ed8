from __future__ import annotations

import time
from typing import Callable


TimeSource = Callable[[], int]


def monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


class ManualClock:
    """Time source that only moves when told to. Milliseconds."""

    def __init__(self, start: int = 0) -> None:
        self.now = int(start)

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += int(ms)


class DropClock:
    """Gravity gate: opens once ``speed`` ms have passed since the last drop."""

    def __init__(self, now: TimeSource = monotonic_ms) -> None:
        self._now = now
        self.last_drop = now()

    def reset(self) -> None:
        self.last_drop = self._now()

    def ready(self, speed: int) -> bool:
        now = self._now()
        if now - self.last_drop >= speed:
            self.last_drop = now
            return True
        return False
