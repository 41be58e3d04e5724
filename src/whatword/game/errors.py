"""Error taxonomy for the game core."""

from __future__ import annotations


class WhatWordError(Exception):
    """Base class for all game errors."""


class LoadError(WhatWordError):
    """The category catalog is missing or malformed. Fatal at startup."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class InvalidTransition(WhatWordError):
    """A phase-specific call arrived in the wrong phase (only raised in strict mode)."""

    def __init__(self, operation: str, phase) -> None:
        self.operation = operation
        self.phase = phase
        super().__init__(f"{operation} is not valid in phase {getattr(phase, 'value', phase)}")


__all__ = ["InvalidTransition", "LoadError", "WhatWordError"]
