from __future__ import annotations

import logging
import math
import random
import struct
import wave
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from whatword.paths import cache_dir

logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050

# Relative loudness per cue; multiplied by the player volume.
_GAINS = {
    "correct": 0.80,
    "wrong": 0.90,
    "ticking": 0.55,
    "buzz": 1.00,
}


@dataclass
class AudioRuntime:
    enabled: bool = False
    volume: float = 0.85
    sounds: dict[str, Any] = field(default_factory=dict)
    loop_key: str | None = None


def _clamp01(v: float) -> float:
    return max(0.0, min(1.0, float(v)))


def _write_wav(path: Path, *, samples: list[float], sample_rate: int = SAMPLE_RATE) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(int(sample_rate))
        pcm = bytearray()
        for s in samples:
            x = max(-1.0, min(1.0, float(s)))
            pcm.extend(struct.pack("<h", int(x * 32767.0)))
        wf.writeframes(bytes(pcm))


def _tone_sweep(
    *,
    f0: float,
    f1: float,
    duration_s: float,
    amp: float,
    sample_rate: int = SAMPLE_RATE,
    noise_mix: float = 0.0,
    seed: int = 1,
) -> list[float]:
    total = max(1, int(float(duration_s) * float(sample_rate)))
    rng = random.Random(int(seed))
    out: list[float] = []
    ph = 0.0
    for i in range(total):
        t = float(i) / float(max(1, total - 1))
        env = math.sin(math.pi * t) ** 1.2
        freq = float(f0) + (float(f1) - float(f0)) * t
        ph += (math.tau * freq) / float(sample_rate)
        tone = math.sin(ph) * env
        noise = (rng.uniform(-1.0, 1.0) * env) if noise_mix > 0.0 else 0.0
        out.append(float(amp) * ((tone * (1.0 - float(noise_mix))) + (noise * float(noise_mix))))
    return out


def _tick_click(*, period_s: float, amp: float, sample_rate: int = SAMPLE_RATE, seed: int = 7) -> list[float]:
    """One short wooden click followed by silence, `period_s` long in total (loops cleanly)."""

    total = max(1, int(float(period_s) * float(sample_rate)))
    click_len = min(total, int(0.06 * float(sample_rate)))
    rng = random.Random(int(seed))
    out: list[float] = []
    lp = 0.0
    for i in range(click_len):
        t = float(i) / float(max(1, click_len - 1))
        env = math.exp(-9.0 * t)
        lp = (lp * 0.70) + (rng.uniform(-1.0, 1.0) * 0.30)
        knock = math.sin(2.0 * math.pi * 1450.0 * (i / float(sample_rate))) * math.exp(-30.0 * t)
        out.append(float(amp) * ((lp * env * 0.55) + (knock * 0.60)))
    out.extend([0.0] * (total - click_len))
    return out


def _ensure_assets(root: Path | None = None) -> dict[str, Path]:
    root = root if root is not None else cache_dir() / "sfx_v1"
    root.mkdir(parents=True, exist_ok=True)
    paths = {
        "correct": root / "correct.wav",
        "wrong": root / "wrong.wav",
        "ticking": root / "ticking.wav",
        "buzz": root / "buzz.wav",
    }
    if not paths["correct"].exists():
        _write_wav(paths["correct"], samples=_tone_sweep(f0=520.0, f1=1180.0, duration_s=0.22, amp=0.58, noise_mix=0.04))
    if not paths["wrong"].exists():
        _write_wav(paths["wrong"], samples=_tone_sweep(f0=330.0, f1=110.0, duration_s=0.55, amp=0.70, noise_mix=0.22))
    if not paths["ticking"].exists():
        _write_wav(paths["ticking"], samples=_tick_click(period_s=1.0, amp=0.60))
    if not paths["buzz"].exists():
        _write_wav(paths["buzz"], samples=_tone_sweep(f0=58.0, f1=52.0, duration_s=0.40, amp=0.85, noise_mix=0.35, seed=3))
    return paths


class AudioPlayer:
    """
    Fire-and-forget sound cues on top of Panda3D's `loader.loadSfx`.

    Sounds are synthesized into the cache dir on first run. Any failure (no audio
    device, missing loader, unreadable cache) leaves the player disabled; cues
    then do nothing.
    """

    def __init__(self, host, *, volume: float = 0.85) -> None:
        self._host = host
        self.runtime = AudioRuntime(volume=_clamp01(volume))

    @property
    def enabled(self) -> bool:
        return self.runtime.enabled

    def init(self, *, asset_root: Path | None = None) -> bool:
        st = self.runtime
        st.enabled = False
        st.sounds.clear()
        st.loop_key = None
        loader = getattr(self._host, "loader", None)
        if loader is None:
            return False
        try:
            paths = _ensure_assets(asset_root)
        except OSError:
            logger.warning("Could not prepare sound cache; audio disabled", exc_info=True)
            return False

        for key, path in paths.items():
            try:
                snd = loader.loadSfx(path.as_posix())
            except Exception:
                logger.warning("Failed to load sound %s", path, exc_info=True)
                snd = None
            if snd is not None:
                st.sounds[key] = snd
        st.enabled = bool(st.sounds)
        logger.debug("Audio ready: %s", sorted(st.sounds))
        return st.enabled

    def set_volume(self, value: float) -> None:
        self.runtime.volume = _clamp01(value)

    def _gain_for(self, key: str) -> float:
        return _clamp01(float(self.runtime.volume) * float(_GAINS.get(key, 1.0)))

    def _play(self, key: str, *, loop: bool = False) -> None:
        st = self.runtime
        if not st.enabled:
            return
        snd = st.sounds.get(str(key))
        if snd is None:
            return
        snd.stop()
        snd.setLoop(bool(loop))
        snd.setVolume(self._gain_for(key))
        snd.play()

    def play_sound(self, name: str) -> None:
        self._play(name)

    def play_loop(self, name: str) -> None:
        if self.runtime.loop_key is not None and self.runtime.loop_key != name:
            self.stop_loop()
        self.runtime.loop_key = str(name)
        self._play(name, loop=True)

    def stop_loop(self) -> None:
        key = self.runtime.loop_key
        self.runtime.loop_key = None
        if key is None:
            return
        snd = self.runtime.sounds.get(key)
        if snd is not None:
            snd.stop()

    def vibrate(self) -> None:
        # Desktop has no haptics; a low rumble stands in for the phone buzz.
        self._play("buzz")


__all__ = ["AudioPlayer", "AudioRuntime"]
