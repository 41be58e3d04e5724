from __future__ import annotations

import os
from pathlib import Path

import whatword


def package_root() -> Path:
    """
    Return the installed `whatword` package directory.

    Derived from the package location so bundled assets resolve the same way
    from an editable checkout and from an installed wheel.
    """

    return Path(whatword.__file__).resolve().parent


def bundled_categories_path() -> Path:
    return package_root() / "assets" / "categories.json"


def cache_dir() -> Path:
    """
    Directory for generated files (synthesized sound effects).

    Override for tests/dev via `WHATWORD_CACHE_DIR`.
    """

    override = os.environ.get("WHATWORD_CACHE_DIR")
    if override:
        return Path(override)
    return Path.home() / ".whatword" / "cache"


def default_categories_path() -> Path:
    """Catalog used when no `--categories` is given (`WHATWORD_CATEGORIES` wins over the bundled file)."""

    override = os.environ.get("WHATWORD_CATEGORIES")
    if override:
        return Path(override)
    return bundled_categories_path()


def resolve_categories_path(override: str | None) -> Path:
    return Path(override) if override else default_categories_path()
