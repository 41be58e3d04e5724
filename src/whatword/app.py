from __future__ import annotations

import logging

from direct.showbase.ShowBase import ShowBase
from direct.task import Task
from panda3d.core import loadPrcFileData

from whatword.app_config import RunConfig
from whatword.common.error_log import ErrorLog
from whatword.game.audio_system import AudioPlayer
from whatword.game.catalog import CategoryCatalog, load
from whatword.game.controller import GameController, InputRouter
from whatword.game.timer import RoundTimer
from whatword.paths import resolve_categories_path
from whatword.ui.scene import GameScene
from whatword.ui.theme import Theme

logger = logging.getLogger(__name__)


class WhatWordApp(ShowBase):
    def __init__(self, cfg: RunConfig, catalog: CategoryCatalog) -> None:
        loadPrcFileData("", "window-title WhatWord")
        loadPrcFileData("", "win-size 540 960")
        if cfg.smoke or cfg.muted:
            # No audio device needed.
            loadPrcFileData("", "audio-library-name null")
        if cfg.smoke:
            loadPrcFileData("", "window-type offscreen")

        super().__init__()

        self.cfg = cfg
        self.disableMouse()
        self.error_log = ErrorLog(max_items=20)

        self.audio = AudioPlayer(self)
        if not (cfg.smoke or cfg.muted) and not self.audio.init():
            self.error_log.log_message(context="audio.init", message="No sound available; playing silently")

        self.controller = GameController(
            catalog,
            timer=RoundTimer(cfg.start_seconds),
            audio=self.audio,
        )
        self.inputs = InputRouter(self.controller)
        self.scene = GameScene(base=self, theme=Theme(), inputs=self.inputs, safe_call=self._safe_call)
        self.controller.presentation = self.scene
        self.scene.sync(self.controller)
        self.scene.show_status(self.error_log.status_text())

        self._setup_input()
        self.taskMgr.add(self._update, "whatword-update")

        if cfg.smoke:
            # Exercise one round start, then exit after a handful of frames.
            self.inputs.on_start_pressed()
            self._smoke_frames = 8
            self.taskMgr.add(self._smoke_exit, "smoke-exit")

    def _setup_input(self) -> None:
        # Taps fire on press; DirectButton commands fire on release.
        for evt in ("mouse1", "space"):
            self.accept(evt, lambda: self._safe_call("input.tap", self.inputs.on_tap))
        for evt in ("arrow_up", "+", "="):
            self.accept(evt, lambda: self._safe_call("input.increase", self.inputs.on_increase_time))
        for evt in ("arrow_down", "-"):
            self.accept(evt, lambda: self._safe_call("input.decrease", self.inputs.on_decrease_time))
        self.accept("enter", lambda: self._safe_call("input.confirm", self.inputs.on_confirm))
        self.accept("escape", lambda: self._safe_call("input.home", self.inputs.on_home_pressed))
        self.accept("f3", self._clear_errors)

    def _safe_call(self, context: str, fn) -> None:
        if not self.error_log.guard(context, fn):
            self.scene.show_status(self.error_log.status_text())

    def _clear_errors(self) -> None:
        self.error_log.clear()
        self.scene.show_status("")

    def _update(self, task: Task) -> int:
        self.scene.pulses.drain(lambda: self._safe_call("timer.tick", self.controller.tick))
        return Task.cont

    def _smoke_exit(self, task: Task) -> int:
        self._smoke_frames -= 1
        if self._smoke_frames <= 0:
            self.userExit()
            return Task.done
        return Task.cont

    def userExit(self, *args, **kwargs) -> None:  # type: ignore[override]
        self._safe_call("audio.stop", self.audio.stop_loop)
        # No status banner once the scene is gone.
        self.error_log.guard("scene.teardown", self.scene.teardown)
        super().userExit(*args, **kwargs)


def load_catalog(cfg: RunConfig) -> CategoryCatalog:
    return load(resolve_categories_path(cfg.categories_path))


def run(cfg: RunConfig) -> None:
    # Catalog problems are fatal and surface before a window opens.
    catalog = load_catalog(cfg)
    app = WhatWordApp(cfg, catalog)
    logger.info("Starting WhatWord (%d categories, %ds rounds)", len(catalog), app.controller.timer.max)
    app.run()


__all__ = ["WhatWordApp", "load_catalog", "run"]
