from __future__ import annotations

import json
import logging
import plistlib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Union

from whatword.game.errors import LoadError
from whatword.paths import bundled_categories_path

logger = logging.getLogger(__name__)

# Joins the two halves of a compound category key, e.g. "Fruit$Vegetable".
COMPOUND_DELIMITER = "$"


@dataclass(frozen=True)
class SimpleCategory:
    name: str
    letters: str

    @property
    def key(self) -> str:
        return self.name

    @property
    def display_lines(self) -> tuple[str, ...]:
        return (self.name.upper(),)


@dataclass(frozen=True)
class CompoundCategory:
    """Two names sharing one letter pool, displayed on two lines."""

    name_a: str
    name_b: str
    letters: str

    @property
    def key(self) -> str:
        return f"{self.name_a}{COMPOUND_DELIMITER}{self.name_b}"

    @property
    def display_lines(self) -> tuple[str, ...]:
        return (self.name_a.upper(), self.name_b.upper())


CategoryEntry = Union[SimpleCategory, CompoundCategory]


def _normalize_pool(pool: str) -> str:
    return "".join(ch.upper() for ch in pool if not ch.isspace())


def decode_entry(key: str, pool: str) -> CategoryEntry:
    """
    Decode one raw catalog row into a category entry.

    A compound key holds exactly two names joined by a single delimiter.
    """

    letters = _normalize_pool(pool)
    if not letters:
        raise LoadError(f"category {key!r} has an empty letter pool")
    name = key.strip()
    if not name:
        raise LoadError("category key is blank")
    if COMPOUND_DELIMITER not in name:
        return SimpleCategory(name=name, letters=letters)
    if name.count(COMPOUND_DELIMITER) > 1:
        raise LoadError(f"compound category {key!r} must join exactly two names with {COMPOUND_DELIMITER!r}")
    first, _, second = name.partition(COMPOUND_DELIMITER)
    first = first.strip()
    second = second.strip()
    if not first or not second:
        raise LoadError(f"compound category {key!r} must have two non-empty names")
    return CompoundCategory(name_a=first, name_b=second, letters=letters)


class CategoryCatalog:
    """
    Ordered, read-only mapping of raw category key -> letter pool.

    Entries are decoded once on construction so malformed rows fail at load time,
    not in the middle of a round.
    """

    def __init__(self, rows: Mapping[str, str]) -> None:
        decoded: dict[str, CategoryEntry] = {}
        pools: dict[str, str] = {}
        for key, pool in rows.items():
            entry = decode_entry(key, pool)
            decoded[key] = entry
            pools[key] = entry.letters
        if not decoded:
            raise LoadError("catalog has no categories")
        self._pools = MappingProxyType(pools)
        self._decoded = MappingProxyType(decoded)

    def __len__(self) -> int:
        return len(self._pools)

    def __contains__(self, key: object) -> bool:
        return key in self._pools

    def __iter__(self) -> Iterator[str]:
        return iter(self._pools)

    def __repr__(self) -> str:
        return f"CategoryCatalog({len(self)} categories)"

    def entries(self) -> list[tuple[str, str]]:
        return list(self._pools.items())

    def categories(self) -> list[CategoryEntry]:
        return list(self._decoded.values())

    def category(self, key: str) -> CategoryEntry:
        try:
            return self._decoded[key]
        except KeyError:
            raise KeyError(f"unknown category {key!r}") from None

    def letter_pool(self, key: str) -> str:
        return self._pools[key]


def _reject_duplicate_keys(pairs: list[tuple[str, object]]) -> dict[str, object]:
    out: dict[str, object] = {}
    for key, value in pairs:
        if key in out:
            raise LoadError(f"duplicate category key {key!r}")
        out[key] = value
    return out


def _read_file(path: Path) -> object:
    if not path.is_file():
        raise LoadError("catalog file not found", source=str(path))
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise LoadError(f"cannot read catalog: {e}", source=str(path)) from e

    if path.suffix.lower() == ".plist":
        try:
            return plistlib.loads(raw)
        except Exception as e:
            raise LoadError(f"invalid property list: {e}", source=str(path)) from e

    try:
        return json.loads(raw.decode("utf-8"), object_pairs_hook=_reject_duplicate_keys)
    except LoadError as e:
        raise LoadError(str(e), source=str(path)) from e
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise LoadError(f"invalid JSON: {e}", source=str(path)) from e


def _validate_rows(payload: object, *, origin: str) -> dict[str, str]:
    if not isinstance(payload, Mapping):
        raise LoadError(f"expected a mapping of category -> letters, got {type(payload).__name__}", source=origin)
    rows: dict[str, str] = {}
    for key, value in payload.items():
        if not isinstance(key, str):
            raise LoadError(f"category key {key!r} is not a string", source=origin)
        if not isinstance(value, str):
            raise LoadError(f"letters for {key!r} must be a string, got {type(value).__name__}", source=origin)
        rows[key] = value
    return rows


def load(source: str | Path | Mapping[str, str]) -> CategoryCatalog:
    """
    Load a category catalog.

    `source` is a path to a `.json` / `.plist` file, or an already-parsed mapping.
    Raises `LoadError` when the source is missing or is not a non-empty mapping of
    string -> string.
    """

    if isinstance(source, Mapping):
        origin = "<mapping>"
        payload: object = source
    elif isinstance(source, (str, Path)):
        origin = str(source)
        payload = _read_file(Path(source))
    else:
        raise LoadError(f"unsupported catalog source {type(source).__name__}")

    rows = _validate_rows(payload, origin=origin)
    try:
        catalog = CategoryCatalog(rows)
    except LoadError as e:
        if e.source is not None:
            raise
        raise LoadError(str(e), source=origin) from e
    logger.info("Loaded %d categories from %s", len(catalog), origin)
    return catalog


def load_default() -> CategoryCatalog:
    return load(bundled_categories_path())


__all__ = [
    "COMPOUND_DELIMITER",
    "CategoryCatalog",
    "CategoryEntry",
    "CompoundCategory",
    "SimpleCategory",
    "decode_entry",
    "load",
    "load_default",
]
