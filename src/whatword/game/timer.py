from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

MIN_SECONDS = 3
MAX_SECONDS = 10
DEFAULT_SECONDS = 5


def clamp_seconds(seconds: int) -> int:
    return max(MIN_SECONDS, min(MAX_SECONDS, int(seconds)))


@dataclass(frozen=True)
class TimerState:
    remaining: int
    max: int
    running: bool


class RoundTimer:
    """
    Passive countdown: Stopped <-> Running.

    The timer never reads a clock. Whoever owns the frame loop calls `tick()` once
    per pulse; the timer only counts those calls down from `max`.
    """

    def __init__(self, seconds: int = DEFAULT_SECONDS) -> None:
        self._max = clamp_seconds(seconds)
        self._remaining = self._max
        self._running = False

    @property
    def max(self) -> int:
        return self._max

    @property
    def remaining(self) -> int:
        return self._remaining

    def is_running(self) -> bool:
        return self._running

    def state(self) -> TimerState:
        return TimerState(remaining=self._remaining, max=self._max, running=self._running)

    def configure(self, seconds: int) -> bool:
        """Set the round length (clamped). Only while stopped; returns False if ignored."""

        if self._running:
            logger.debug("configure(%s) ignored: timer is running", seconds)
            return False
        self._max = clamp_seconds(seconds)
        self._remaining = self._max
        return True

    def start(self) -> bool:
        if self._running:
            return False
        self._remaining = self._max
        self._running = True
        return True

    def reset(self) -> None:
        self._running = False
        self._remaining = self._max

    def restart(self) -> None:
        self.reset()
        self.start()

    def tick(self) -> bool:
        """
        Count one pulse down. Returns True exactly once per run: on the tick that
        reaches zero (the timer is stopped by then). Ticks while stopped are no-ops.
        """

        if not self._running:
            return False
        self._remaining -= 1
        if self._remaining <= 0:
            self._remaining = 0
            self._running = False
            return True
        return False


__all__ = [
    "DEFAULT_SECONDS",
    "MAX_SECONDS",
    "MIN_SECONDS",
    "RoundTimer",
    "TimerState",
    "clamp_seconds",
]
