from __future__ import annotations

import logging
import time
import traceback
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass
class ErrorItem:
    ts: float
    context: str
    message: str
    tb: str | None
    count: int = 1

    def summary_line(self) -> str:
        base = f"{self.context}: {self.message}".strip()
        if self.count > 1:
            base += f" (x{self.count})"
        return base


class ErrorLog:
    """
    Recent-failures feed for the frame loop and input handlers.

    Identical consecutive failures (typical for a per-frame task) collapse into one
    item with a counter and are only logged the first time.
    """

    def __init__(self, *, max_items: int = 20) -> None:
        self._max_items = max(1, int(max_items))
        self._items: list[ErrorItem] = []
        self._last_key: tuple[str, str] | None = None

    def latest(self) -> ErrorItem | None:
        return self._items[-1] if self._items else None

    def clear(self) -> None:
        self._items.clear()
        self._last_key = None

    def log_message(self, *, context: str, message: str) -> None:
        context = str(context or "unknown")
        message = str(message or "").strip() or "Unknown error"
        if self._append(context=context, message=message, tb=None):
            logger.error("%s: %s", context, message)

    def log_exception(self, *, context: str, exc: BaseException) -> None:
        context = str(context or "unknown")
        msg = f"{type(exc).__name__}: {exc}".strip()
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        if self._append(context=context, message=msg, tb=tb):
            logger.error("%s: %s", context, msg, exc_info=(type(exc), exc, exc.__traceback__))

    def guard(self, context: str, fn: Callable[[], None]) -> bool:
        """Run `fn`; record any exception instead of letting it reach the frame loop.

        Returns False when `fn` raised.
        """

        try:
            fn()
        except Exception as e:
            self.log_exception(context=context, exc=e)
            return False
        return True

    def status_text(self) -> str:
        """One-line banner for the screen: the latest error plus how many came before."""

        last = self.latest()
        if last is None:
            return ""
        text = f"ERROR: {last.summary_line()}"
        earlier = len(self._items) - 1
        if earlier > 0:
            text += f"  [+{earlier} earlier, F3 to clear]"
        else:
            text += "  [F3 to clear]"
        return text

    def _append(self, *, context: str, message: str, tb: str | None) -> bool:
        ts = time.time()
        key = (context, message)
        if self._items and self._last_key == key:
            self._items[-1].ts = ts
            self._items[-1].count += 1
            return False

        self._items.append(ErrorItem(ts=ts, context=context, message=message, tb=tb, count=1))
        self._last_key = key
        if len(self._items) > self._max_items:
            self._items = self._items[-self._max_items :]
        return True
