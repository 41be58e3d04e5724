from __future__ import annotations

import wave
from pathlib import Path
from types import SimpleNamespace

from whatword.game import audio_system
from whatword.game.audio_system import AudioPlayer


class _FakeSound:
    def __init__(self, path: str) -> None:
        self.path = path
        self.calls: list[tuple] = []

    def setLoop(self, loop: bool) -> None:
        self.calls.append(("loop", bool(loop)))

    def setVolume(self, vol: float) -> None:
        self.calls.append(("volume", float(vol)))

    def play(self) -> None:
        self.calls.append(("play",))

    def stop(self) -> None:
        self.calls.append(("stop",))


def _host_with_fake_loader() -> SimpleNamespace:
    loaded: dict[str, _FakeSound] = {}

    def _load(path: str) -> _FakeSound:
        snd = _FakeSound(path)
        loaded[Path(path).stem] = snd
        return snd

    return SimpleNamespace(loader=SimpleNamespace(loadSfx=_load), loaded=loaded)


def test_ensure_assets_writes_playable_wavs(tmp_path: Path) -> None:
    paths = audio_system._ensure_assets(tmp_path / "sfx")

    assert set(paths) == {"correct", "wrong", "ticking", "buzz"}
    for p in paths.values():
        with wave.open(str(p), "rb") as wf:
            assert wf.getnchannels() == 1
            assert wf.getnframes() > 0

    # The ticking loop is one pulse long so it lines up with the timer.
    with wave.open(str(paths["ticking"]), "rb") as wf:
        assert wf.getnframes() == audio_system.SAMPLE_RATE


def test_ensure_assets_uses_cache_dir_override(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("WHATWORD_CACHE_DIR", str(tmp_path / "cache"))
    paths = audio_system._ensure_assets()
    assert paths["correct"].parent == tmp_path / "cache" / "sfx_v1"
    assert paths["correct"].exists()


def test_init_without_loader_stays_disabled() -> None:
    player = AudioPlayer(SimpleNamespace())
    assert player.init() is False
    assert player.enabled is False
    # Cues are silently skipped while disabled.
    player.play_sound("correct")
    player.play_loop("ticking")
    player.stop_loop()
    player.vibrate()


def test_cues_route_to_expected_sounds(monkeypatch) -> None:
    calls: list[tuple[str, bool]] = []

    def _capture(_self, key: str, *, loop: bool = False) -> None:
        calls.append((str(key), bool(loop)))

    monkeypatch.setattr(AudioPlayer, "_play", _capture)
    player = AudioPlayer(SimpleNamespace())

    player.play_sound("correct")
    player.play_loop("ticking")
    player.play_sound("wrong")
    player.vibrate()

    assert calls == [("correct", False), ("ticking", True), ("wrong", False), ("buzz", False)]


def test_loop_start_and_stop_with_loaded_sounds(tmp_path: Path) -> None:
    host = _host_with_fake_loader()
    player = AudioPlayer(host, volume=0.5)
    assert player.init(asset_root=tmp_path / "sfx") is True

    player.play_loop("ticking")
    ticking = host.loaded["ticking"]
    assert ("loop", True) in ticking.calls
    assert ticking.calls[-1] == ("play",)

    player.stop_loop()
    assert ticking.calls[-1] == ("stop",)
    assert player.runtime.loop_key is None

    # Stopping twice is harmless.
    player.stop_loop()


def test_volume_scales_cue_gain(tmp_path: Path) -> None:
    host = _host_with_fake_loader()
    player = AudioPlayer(host, volume=1.0)
    player.init(asset_root=tmp_path / "sfx")

    player.play_sound("wrong")
    loud = [c[1] for c in host.loaded["wrong"].calls if c[0] == "volume"][-1]
    player.set_volume(0.25)
    player.play_sound("wrong")
    quiet = [c[1] for c in host.loaded["wrong"].calls if c[0] == "volume"][-1]

    assert loud > quiet > 0.0
