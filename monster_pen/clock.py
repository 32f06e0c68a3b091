"""Millisecond clock sources for the poll loop."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def now_ms(self) -> int: ...


class MonotonicClock:
    """Wall-clock source; epoch is the moment of construction."""

    def __init__(self) -> None:
        self._start = time.monotonic()

    def now_ms(self) -> int:
        return int((time.monotonic() - self._start) * 1000)


class ManualClock:
    """Clock driven explicitly, for tests and scripted replays."""

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("start must be >= 0")
        self._now = start

    def now_ms(self) -> int:
        return self._now

    def advance(self, ms: int) -> int:
        if ms < 0:
            raise ValueError("clock cannot run backwards")
        self._now += ms
        return self._now

    def set(self, now: int) -> None:
        if now < self._now:
            raise ValueError(
                f"clock cannot run backwards ({now} < {self._now})"
            )
        self._now = now
