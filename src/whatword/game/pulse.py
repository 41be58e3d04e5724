from __future__ import annotations

from typing import Callable

from whatword.game.controller import GamePhase, NullPresentation


class TimerPulse(NullPresentation):
    """
    Counts completed timer-pulse cycles between frames.

    The pulse animation calls `cycle_completed()` once per cycle; the frame task
    calls `drain()` to turn pending cycles into controller ticks. Pending cycles
    belong to the round that was on screen when they completed, so a new round
    or any phase change discards them.
    """

    def __init__(self) -> None:
        self._pending = 0

    @property
    def pending(self) -> int:
        return self._pending

    def cycle_completed(self) -> None:
        self._pending += 1

    def reset(self) -> None:
        self._pending = 0

    def drain(self, tick: Callable[[], object]) -> int:
        """Call `tick` once per pending cycle; returns how many ticks ran."""

        ran = 0
        # Re-read each time: a tick that ends the round resets the counter.
        while self._pending > 0:
            self._pending -= 1
            ran += 1
            tick()
        return ran

    def on_phase_changed(self, phase: GamePhase) -> None:
        self.reset()

    def on_timer_started(self, remaining: int) -> None:
        self.reset()

    def on_timer_expired(self) -> None:
        self.reset()


__all__ = ["TimerPulse"]
