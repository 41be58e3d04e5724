from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Protocol, Sequence, TypeVar

from whatword.game.catalog import CategoryCatalog, CategoryEntry

T = TypeVar("T")


class RandomSource(Protocol):
    def choice(self, seq: Sequence[T]) -> T: ...


@dataclass(frozen=True)
class RoundState:
    category: CategoryEntry | None = None
    letter: str | None = None

    def is_empty(self) -> bool:
        return self.category is None and self.letter is None


class RoundPicker:
    """
    Picks the next category + letter, avoiding an immediate repeat whenever an
    alternative exists.

    Drawing uniformly among the candidates that differ from `previous` has the
    same distribution as redrawing until they differ, but always terminates:
    when nothing differs (single entry, single distinct letter) the whole pool
    is used instead.
    """

    def __init__(self, rng: RandomSource | None = None) -> None:
        # The `random` module itself is the process-wide source.
        self._rng: RandomSource = rng if rng is not None else random

    def pick_category(self, catalog: CategoryCatalog, previous: CategoryEntry | None) -> CategoryEntry:
        pool = catalog.categories()
        if previous is None or len(pool) == 1:
            return self._rng.choice(pool)
        # Compared on the rendered lines, not the raw key.
        shown = previous.display_lines
        candidates = [c for c in pool if c.display_lines != shown]
        return self._rng.choice(candidates or pool)

    def pick_letter(self, letter_pool: str, previous: str | None) -> str:
        if not letter_pool:
            raise ValueError("letter pool is empty")
        letters = list(letter_pool)
        if previous is None:
            return self._rng.choice(letters)
        # Duplicates are kept so a letter listed twice stays twice as likely.
        candidates = [ch for ch in letters if ch != previous]
        return self._rng.choice(candidates or letters)

    def next_round(self, catalog: CategoryCatalog, previous: RoundState | None = None) -> RoundState:
        prev = previous if previous is not None else RoundState()
        category = self.pick_category(catalog, prev.category)
        letter = self.pick_letter(category.letters, prev.letter)
        return RoundState(category=category, letter=letter)


__all__ = ["RandomSource", "RoundPicker", "RoundState"]
