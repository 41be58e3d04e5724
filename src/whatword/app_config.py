from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RunConfig:
    smoke: bool = False
    # Optional catalog override (.json or .plist). If None, `paths.default_categories_path()` is used.
    categories_path: str | None = None
    # Initial round length in seconds. Clamped by the round timer to its allowed range.
    start_seconds: int = 5
    # Skip audio setup entirely (also implied by smoke runs).
    muted: bool = False
