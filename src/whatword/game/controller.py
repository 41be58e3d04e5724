from __future__ import annotations

import enum
import logging
from typing import Callable, Protocol

from whatword.game.catalog import CategoryCatalog, CategoryEntry
from whatword.game.errors import InvalidTransition
from whatword.game.picker import RoundPicker, RoundState
from whatword.game.timer import RoundTimer, TimerState

logger = logging.getLogger(__name__)

SOUND_CORRECT = "correct"
SOUND_WRONG = "wrong"
LOOP_TICKING = "ticking"


class GamePhase(str, enum.Enum):
    MENU = "menu"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class Presentation(Protocol):
    def on_phase_changed(self, phase: GamePhase) -> None: ...
    def on_round_changed(self, category: CategoryEntry | None, letter: str | None) -> None: ...
    def on_timer_started(self, remaining: int) -> None: ...
    def on_timer_tick(self, remaining: int) -> None: ...
    def on_timer_expired(self) -> None: ...
    def on_time_limit_changed(self, seconds: int) -> None: ...


class AudioSink(Protocol):
    def play_sound(self, name: str) -> None: ...
    def play_loop(self, name: str) -> None: ...
    def stop_loop(self) -> None: ...
    def vibrate(self) -> None: ...


class NullPresentation:
    def on_phase_changed(self, phase: GamePhase) -> None:
        pass

    def on_round_changed(self, category: CategoryEntry | None, letter: str | None) -> None:
        pass

    def on_timer_started(self, remaining: int) -> None:
        pass

    def on_timer_tick(self, remaining: int) -> None:
        pass

    def on_timer_expired(self) -> None:
        pass

    def on_time_limit_changed(self, seconds: int) -> None:
        pass


class NullAudio:
    def play_sound(self, name: str) -> None:
        pass

    def play_loop(self, name: str) -> None:
        pass

    def stop_loop(self) -> None:
        pass

    def vibrate(self) -> None:
        pass


class GameController:
    """
    Menu -> Playing -> GameOver -> (Playing | Menu).

    Owns the round picker and the round timer. All state changes happen here and
    are pushed to the presentation as explicit events; audio cues are fire-and-forget.
    Calls that do not fit the current phase are ignored (or raise
    `InvalidTransition` when `strict=True`).
    """

    def __init__(
        self,
        catalog: CategoryCatalog,
        *,
        picker: RoundPicker | None = None,
        timer: RoundTimer | None = None,
        presentation: Presentation | None = None,
        audio: AudioSink | None = None,
        strict: bool = False,
    ) -> None:
        self.catalog = catalog
        self.picker = picker if picker is not None else RoundPicker()
        self.timer = timer if timer is not None else RoundTimer()
        self.presentation: Presentation = presentation if presentation is not None else NullPresentation()
        self.audio: AudioSink = audio if audio is not None else NullAudio()
        self.strict = bool(strict)
        self._phase = GamePhase.MENU
        self._round = RoundState()

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def round(self) -> RoundState:
        return self._round

    def timer_state(self) -> TimerState:
        return self.timer.state()

    # Menu

    def increase_time(self) -> bool:
        return self._adjust_time(+1, "increase_time")

    def decrease_time(self) -> bool:
        return self._adjust_time(-1, "decrease_time")

    def start_game(self) -> bool:
        if not self._allowed("start_game", GamePhase.MENU):
            return False
        self._begin_round()
        return True

    # Playing

    def reveal_next(self) -> bool:
        if not self._allowed("reveal_next", GamePhase.PLAYING):
            return False
        self._round = self.picker.next_round(self.catalog, self._round)
        self.timer.restart()
        self._audio("reveal", lambda: self.audio.play_sound(SOUND_CORRECT))
        self.presentation.on_round_changed(self._round.category, self._round.letter)
        self.presentation.on_timer_started(self.timer.remaining)
        return True

    def tick(self) -> bool:
        """Forward one pulse to the timer. Returns True on the tick that ends the round."""

        # Ticks outside of play are expected (a pulse may land after a transition).
        if self._phase is not GamePhase.PLAYING:
            return False
        expired = self.timer.tick()
        if not expired:
            self.presentation.on_timer_tick(self.timer.remaining)
            return False
        # State is committed before any collaborator runs.
        changed = self._enter_phase(GamePhase.GAME_OVER)
        self._audio("stop_loop", self.audio.stop_loop)
        self._audio("game_over", lambda: self.audio.play_sound(SOUND_WRONG))
        self._audio("vibrate", self.audio.vibrate)
        self.presentation.on_timer_tick(self.timer.remaining)
        self.presentation.on_timer_expired()
        if changed:
            self.presentation.on_phase_changed(GamePhase.GAME_OVER)
        return True

    # GameOver

    def restart(self) -> bool:
        if not self._allowed("restart", GamePhase.GAME_OVER):
            return False
        self._begin_round()
        return True

    def return_to_menu(self) -> bool:
        if not self._allowed("return_to_menu", GamePhase.GAME_OVER):
            return False
        self.timer.reset()
        self._round = RoundState()
        changed = self._enter_phase(GamePhase.MENU)
        self.presentation.on_round_changed(None, None)
        if changed:
            self.presentation.on_phase_changed(GamePhase.MENU)
        return True

    # Internals

    def _begin_round(self) -> None:
        # First round of a game: nothing on screen to avoid repeating.
        self._round = self.picker.next_round(self.catalog, None)
        self.timer.restart()
        changed = self._enter_phase(GamePhase.PLAYING)
        self._audio("round_start", lambda: self.audio.play_loop(LOOP_TICKING))
        if changed:
            self.presentation.on_phase_changed(GamePhase.PLAYING)
        self.presentation.on_round_changed(self._round.category, self._round.letter)
        self.presentation.on_timer_started(self.timer.remaining)

    def _adjust_time(self, delta: int, operation: str) -> bool:
        if not self._allowed(operation, GamePhase.MENU):
            return False
        before = self.timer.max
        self.timer.configure(before + delta)
        if self.timer.max != before:
            self.presentation.on_time_limit_changed(self.timer.max)
        return True

    def _enter_phase(self, phase: GamePhase) -> bool:
        """Switch phase without notifying; the caller emits `on_phase_changed`."""

        if phase is self._phase:
            return False
        logger.info("Phase %s -> %s", self._phase.value, phase.value)
        self._phase = phase
        return True

    def _allowed(self, operation: str, *phases: GamePhase) -> bool:
        if self._phase in phases:
            return True
        if self.strict:
            raise InvalidTransition(operation, self._phase)
        logger.debug("Ignored %s in phase %s", operation, self._phase.value)
        return False

    def _audio(self, context: str, fn: Callable[[], None]) -> None:
        try:
            fn()
        except Exception:
            logger.warning("Audio cue %r failed", context, exc_info=True)


class InputRouter:
    """Maps raw UI inputs onto controller calls, one to one."""

    def __init__(self, controller: GameController) -> None:
        self._controller = controller

    def on_tap(self) -> None:
        self._controller.reveal_next()

    def on_increase_time(self) -> None:
        self._controller.increase_time()

    def on_decrease_time(self) -> None:
        self._controller.decrease_time()

    def on_start_pressed(self) -> None:
        self._controller.start_game()

    def on_restart_pressed(self) -> None:
        self._controller.restart()

    def on_home_pressed(self) -> None:
        self._controller.return_to_menu()

    def on_confirm(self) -> None:
        # Single "enter" key: start from the menu, restart after game over.
        if self._controller.phase is GamePhase.MENU:
            self.on_start_pressed()
        elif self._controller.phase is GamePhase.GAME_OVER:
            self.on_restart_pressed()


__all__ = [
    "AudioSink",
    "GameController",
    "GamePhase",
    "InputRouter",
    "LOOP_TICKING",
    "NullAudio",
    "NullPresentation",
    "Presentation",
    "SOUND_CORRECT",
    "SOUND_WRONG",
]
