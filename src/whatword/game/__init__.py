"""
Game core.

Pure rules, no rendering:
- `catalog`: category -> letter pool data
- `picker`: non-repeating category/letter selection
- `timer`: passive countdown driven by external ticks
- `controller`: the Menu / Playing / GameOver state machine
- `pulse`: pulse-cycle counter that turns animation cycles into ticks

`audio_system` is the Panda3D-backed audio collaborator; it only needs a host
exposing `loader`, so it stays importable without a window.
"""

from whatword.game.catalog import CategoryCatalog, CompoundCategory, SimpleCategory, load, load_default
from whatword.game.controller import GameController, GamePhase, InputRouter
from whatword.game.errors import InvalidTransition, LoadError, WhatWordError
from whatword.game.picker import RoundPicker, RoundState
from whatword.game.pulse import TimerPulse
from whatword.game.timer import RoundTimer, TimerState

__all__ = [
    "CategoryCatalog",
    "CompoundCategory",
    "GameController",
    "GamePhase",
    "InputRouter",
    "InvalidTransition",
    "LoadError",
    "RoundPicker",
    "RoundState",
    "RoundTimer",
    "SimpleCategory",
    "TimerPulse",
    "TimerState",
    "WhatWordError",
    "load",
    "load_default",
]
