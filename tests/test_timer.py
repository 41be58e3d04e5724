from __future__ import annotations

import pytest

from whatword.game.timer import DEFAULT_SECONDS, RoundTimer, TimerState


@pytest.mark.parametrize("requested,expected", [(2, 3), (15, 10), (7, 7), (3, 3), (10, 10), (-5, 3)])
def test_configure_clamps_to_allowed_range(requested: int, expected: int) -> None:
    timer = RoundTimer()
    assert timer.configure(requested) is True
    assert timer.max == expected
    assert timer.remaining == expected


def test_defaults() -> None:
    timer = RoundTimer()
    assert timer.state() == TimerState(remaining=DEFAULT_SECONDS, max=DEFAULT_SECONDS, running=False)


def test_constructor_clamps() -> None:
    assert RoundTimer(1).max == 3
    assert RoundTimer(99).max == 10


def test_tick_max_times_expires_exactly_once() -> None:
    timer = RoundTimer(4)
    assert timer.start() is True

    signals = [timer.tick() for _ in range(4)]
    assert signals == [False, False, False, True]
    assert timer.is_running() is False
    assert timer.remaining == 0

    # Extra pulses after expiry never signal again.
    assert [timer.tick() for _ in range(5)] == [False] * 5
    assert timer.remaining == 0


def test_tick_while_stopped_is_noop() -> None:
    timer = RoundTimer(5)
    assert timer.tick() is False
    assert timer.state() == TimerState(remaining=5, max=5, running=False)


def test_configure_ignored_while_running() -> None:
    timer = RoundTimer(5)
    timer.start()
    timer.tick()
    assert timer.configure(9) is False
    assert timer.max == 5
    assert timer.remaining == 4


def test_start_twice_does_not_reset_countdown() -> None:
    timer = RoundTimer(5)
    timer.start()
    timer.tick()
    assert timer.start() is False
    assert timer.remaining == 4


def test_reset_and_restart() -> None:
    timer = RoundTimer(6)
    timer.start()
    timer.tick()
    timer.tick()

    timer.restart()
    assert timer.state() == TimerState(remaining=6, max=6, running=True)

    timer.reset()
    assert timer.state() == TimerState(remaining=6, max=6, running=False)
