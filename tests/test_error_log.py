from __future__ import annotations

import logging

from whatword.common.error_log import ErrorLog


def test_error_log_deduplicates_consecutive_same_error() -> None:
    log = ErrorLog(max_items=10)

    for _ in range(2):
        try:
            raise ValueError("boom")
        except Exception as e:
            log.log_exception(context="ctx", exc=e)

    latest = log.latest()
    assert latest is not None
    assert latest.count == 2
    assert "ValueError" in latest.message
    assert latest.summary_line() == "ctx: ValueError: boom (x2)"
    assert log.status_text() == "ERROR: ctx: ValueError: boom (x2)  [F3 to clear]"


def test_error_log_keeps_tail_only() -> None:
    log = ErrorLog(max_items=3)
    for i in range(1, 5):
        log.log_message(context=f"c{i}", message=f"m{i}")

    assert log.status_text() == "ERROR: c4: m4  [+2 earlier, F3 to clear]"


def test_status_text_is_empty_without_errors() -> None:
    log = ErrorLog()
    assert log.status_text() == ""
    log.log_message(context="audio.init", message="No sound available")
    assert log.status_text().startswith("ERROR: audio.init: No sound available")
    log.clear()
    assert log.status_text() == ""
    assert log.latest() is None


def test_guard_records_and_swallows_handler_errors(caplog) -> None:
    log = ErrorLog()

    def _broken() -> None:
        raise RuntimeError("pulse failed")

    with caplog.at_level(logging.ERROR, logger="whatword.common.error_log"):
        assert log.guard("timer.tick", _broken) is False
        assert log.guard("timer.tick", _broken) is False

    latest = log.latest()
    assert latest is not None
    assert latest.context == "timer.tick"
    assert latest.count == 2
    assert latest.tb is not None and "RuntimeError: pulse failed" in latest.tb
    # Repeats are counted, not re-logged.
    assert len([r for r in caplog.records if "pulse failed" in r.getMessage()]) == 1


def test_guard_runs_callable() -> None:
    log = ErrorLog()
    hits: list[int] = []
    assert log.guard("ok", lambda: hits.append(1)) is True
    assert hits == [1]
    assert log.latest() is None
