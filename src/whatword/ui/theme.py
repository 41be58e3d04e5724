from __future__ import annotations

from dataclasses import dataclass

Color = tuple[float, float, float, float]


@dataclass(frozen=True)
class Theme:
    """
    Screen tokens for the single game screen.

    Scales are DirectGUI `text_scale`/`scale` values in aspect2d units; colors are
    normalized RGBA tuples as Panda3D expects them.
    """

    # Typography
    title_scale: float = 0.16
    letter_scale: float = 0.42
    category_scale: float = 0.13
    category_long_scale: float = 0.10
    timer_scale: float = 0.14
    label_scale: float = 0.06
    button_scale: float = 0.09

    # Layout (z positions in aspect2d)
    category_z: float = 0.52
    letter_z: float = -0.12
    timer_z: float = -0.72

    # Palette
    bg: Color = (0.96, 0.78, 0.20, 1.0)
    text: Color = (0.10, 0.09, 0.08, 1.0)
    text_muted: Color = (0.30, 0.26, 0.20, 1.0)
    accent: Color = (0.86, 0.22, 0.16, 1.0)
    button: Color = (0.10, 0.09, 0.08, 1.0)
    button_text: Color = (0.98, 0.96, 0.92, 1.0)
    danger: Color = (0.78, 0.10, 0.12, 1.0)

    # Timer pulse: one full cycle == one tick.
    pulse_half_s: float = 0.5
    pulse_peak_scale: float = 1.25
