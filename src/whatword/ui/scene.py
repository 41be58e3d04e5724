from __future__ import annotations

from typing import Callable

from direct.gui import DirectGuiGlobals as DGG
from direct.gui.DirectGui import DirectButton
from direct.gui.OnscreenText import OnscreenText
from direct.interval.IntervalGlobal import Func, LerpScaleInterval, Sequence
from panda3d.core import TextNode

from whatword.game.catalog import CategoryEntry
from whatword.game.controller import GameController, GamePhase, InputRouter
from whatword.game.pulse import TimerPulse
from whatword.ui.theme import Theme

SafeCall = Callable[[str, Callable[[], None]], None]


def _set_visible(np, visible: bool) -> None:
    if visible:
        np.show()
    else:
        np.hide()


class GameScene:
    """
    Panda3D presentation for the game screen.

    Only reacts to controller events. The timer pulse interval feeds completed
    cycles into `self.pulses`; the app's frame task drains them into
    `GameController.tick()`, so the controller is never re-entered from inside an
    interval callback.
    """

    def __init__(self, *, base, theme: Theme, inputs: InputRouter, safe_call: SafeCall) -> None:
        self._base = base
        self._theme = theme
        self._inputs = inputs
        self._safe_call = safe_call
        self.pulses = TimerPulse()

        base.setBackgroundColor(*theme.bg)
        root = base.aspect2d

        self._menu_np = root.attachNewNode("menu")
        self._play_np = root.attachNewNode("play")
        self._over_np = root.attachNewNode("game-over")

        self._build_menu()
        self._build_play()
        self._build_game_over()
        self._status_text = self._text(root, z=0.92, scale=theme.label_scale * 0.6, fg=theme.danger)
        self._status_text.hide()

        self._pulse = Sequence(
            LerpScaleInterval(self._pulse_np, theme.pulse_half_s, theme.pulse_peak_scale, startScale=1.0),
            LerpScaleInterval(self._pulse_np, theme.pulse_half_s, 1.0),
            Func(self.pulses.cycle_completed),
            name="timer-pulse",
        )

    # Construction

    def _text(self, parent, *, text: str = "", z: float, scale: float, fg=None) -> OnscreenText:
        return OnscreenText(
            text=text,
            parent=parent,
            pos=(0.0, z),
            scale=scale,
            fg=fg if fg is not None else self._theme.text,
            align=TextNode.ACenter,
            mayChange=True,
        )

    def _button(self, parent, *, text: str, x: float, z: float, context: str, fn: Callable[[], None]) -> DirectButton:
        t = self._theme
        return DirectButton(
            parent=parent,
            text=text,
            scale=t.button_scale,
            pos=(x, 0.0, z),
            pad=(0.5, 0.3),
            relief=DGG.FLAT,
            frameColor=t.button,
            text_fg=t.button_text,
            command=lambda: self._safe_call(context, fn),
        )

    def _build_menu(self) -> None:
        t = self._theme
        self._text(self._menu_np, text="WHAT WORD", z=0.45, scale=t.title_scale, fg=t.accent)
        self._text(self._menu_np, text="ROUND TIME", z=0.02, scale=t.label_scale, fg=t.text_muted)
        self._time_limit_text = self._text(self._menu_np, z=-0.16, scale=t.timer_scale)
        self._button(self._menu_np, text="-", x=-0.45, z=-0.14, context="ui.decrease", fn=self._inputs.on_decrease_time)
        self._button(self._menu_np, text="+", x=0.45, z=-0.14, context="ui.increase", fn=self._inputs.on_increase_time)
        self._button(self._menu_np, text="PLAY", x=0.0, z=-0.55, context="ui.start", fn=self._inputs.on_start_pressed)

    def _build_play(self) -> None:
        t = self._theme
        self._category_short = self._text(self._play_np, z=t.category_z, scale=t.category_scale)
        self._category_long1 = self._text(self._play_np, z=t.category_z + 0.08, scale=t.category_long_scale)
        self._category_long2 = self._text(self._play_np, z=t.category_z - 0.06, scale=t.category_long_scale)
        self._letter_text = self._text(self._play_np, z=t.letter_z, scale=t.letter_scale, fg=t.accent)
        self._pulse_np = self._play_np.attachNewNode("timer-pulse")
        self._pulse_np.setZ(t.timer_z)
        self._timer_text = self._text(self._pulse_np, z=0.0, scale=t.timer_scale)
        self._hint_text = self._text(self._play_np, text="tap for the next word", z=-0.9, scale=t.label_scale * 0.7, fg=t.text_muted)

    def _build_game_over(self) -> None:
        t = self._theme
        self._text(self._over_np, text="TIME'S UP!", z=-0.45, scale=t.category_scale, fg=t.danger)
        self._button(self._over_np, text="AGAIN", x=-0.35, z=-0.72, context="ui.restart", fn=self._inputs.on_restart_pressed)
        self._button(self._over_np, text="HOME", x=0.35, z=-0.72, context="ui.home", fn=self._inputs.on_home_pressed)

    # Frame-loop side

    def sync(self, controller: GameController) -> None:
        """Render the controller's current state (used once at startup)."""

        self.on_time_limit_changed(controller.timer.max)
        rnd = controller.round
        self.on_round_changed(rnd.category, rnd.letter)
        self.on_phase_changed(controller.phase)

    def show_status(self, text: str) -> None:
        self._status_text.setText(text)
        _set_visible(self._status_text, bool(text))

    def teardown(self) -> None:
        self._pulse.pause()
        self._status_text.destroy()
        for np in (self._menu_np, self._play_np, self._over_np):
            np.removeNode()

    # Presentation events

    def on_phase_changed(self, phase: GamePhase) -> None:
        _set_visible(self._menu_np, phase is GamePhase.MENU)
        # The last round stays on screen behind the game-over buttons.
        _set_visible(self._play_np, phase is not GamePhase.MENU)
        _set_visible(self._over_np, phase is GamePhase.GAME_OVER)
        _set_visible(self._hint_text, phase is GamePhase.PLAYING)
        self.pulses.on_phase_changed(phase)
        if phase is not GamePhase.PLAYING:
            self._stop_pulse()

    def on_round_changed(self, category: CategoryEntry | None, letter: str | None) -> None:
        lines = category.display_lines if category is not None else ()
        if len(lines) == 2:
            self._category_long1.setText(lines[0])
            self._category_long2.setText(lines[1])
            self._category_long1.show()
            self._category_long2.show()
            self._category_short.hide()
        else:
            self._category_short.setText(lines[0] if lines else "")
            self._category_short.show()
            self._category_long1.hide()
            self._category_long2.hide()
        self._letter_text.setText(letter or "")

    def on_timer_started(self, remaining: int) -> None:
        self._timer_text.setText(str(int(remaining)))
        self.pulses.on_timer_started(remaining)
        self._pulse.loop()

    def on_timer_tick(self, remaining: int) -> None:
        self._timer_text.setText(str(int(remaining)))

    def on_timer_expired(self) -> None:
        self.pulses.on_timer_expired()
        self._stop_pulse()

    def on_time_limit_changed(self, seconds: int) -> None:
        self._time_limit_text.setText(str(int(seconds)))

    def _stop_pulse(self) -> None:
        self._pulse.pause()
        self._pulse_np.setScale(1.0)


__all__ = ["GameScene"]
