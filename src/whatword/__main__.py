from __future__ import annotations

import argparse
import logging
import sys

from whatword.app import run
from whatword.app_config import RunConfig
from whatword.game.catalog import load
from whatword.game.errors import LoadError
from whatword.game.timer import DEFAULT_SECONDS, MAX_SECONDS, MIN_SECONDS, clamp_seconds
from whatword.paths import resolve_categories_path


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="whatword", description="WhatWord party word game")
    parser.add_argument(
        "--smoke",
        action="store_true",
        help="Run briefly offscreen and exit (for quick verification).",
    )
    parser.add_argument(
        "--categories",
        dest="categories_path",
        default=None,
        help=(
            "Category catalog to play with (.json or .plist): a mapping of category -> letter pool.\n"
            'Use "First$Second" keys for two-line categories. Defaults to $WHATWORD_CATEGORIES, '
            "then the bundled catalog."
        ),
    )
    parser.add_argument(
        "--time",
        dest="start_seconds",
        type=int,
        default=DEFAULT_SECONDS,
        help=f"Initial round length in seconds ({MIN_SECONDS}..{MAX_SECONDS}, default: {DEFAULT_SECONDS}).",
    )
    parser.add_argument(
        "--mute",
        action="store_true",
        help="Disable sound.",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Validate the category catalog, print a summary and exit.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Debug logging to stderr.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cfg = RunConfig(
        smoke=bool(args.smoke),
        categories_path=args.categories_path,
        start_seconds=clamp_seconds(args.start_seconds),
        muted=bool(args.mute),
    )

    try:
        if args.check:
            catalog = load(resolve_categories_path(cfg.categories_path))
            compound = sum(1 for c in catalog.categories() if len(c.display_lines) == 2)
            print(f"categories: {len(catalog)} ({compound} two-line)")
            return
        run(cfg)
    except LoadError as e:
        print(f"whatword: cannot load categories: {e}", file=sys.stderr)
        raise SystemExit(2) from e


if __name__ == "__main__":
    main()
