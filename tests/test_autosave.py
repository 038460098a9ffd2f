"""Tests for debounced saving."""

import threading

from chili_diary.services.autosave import DebouncedSaver


def test_flush_runs_pending_save_once() -> None:
    calls: list[str] = []
    saver = DebouncedSaver(lambda: calls.append("save"), delay_seconds=60)

    saver.trigger()
    saver.trigger()
    saver.trigger()
    assert saver.pending

    saver.flush()
    saver.flush()

    assert calls == ["save"]
    assert not saver.pending


def test_cancel_drops_pending_save() -> None:
    calls: list[str] = []
    saver = DebouncedSaver(lambda: calls.append("save"), delay_seconds=60)

    saver.trigger()
    saver.cancel()
    saver.flush()

    assert calls == []


def test_timer_fires_after_quiet_period() -> None:
    saved = threading.Event()
    saver = DebouncedSaver(saved.set, delay_seconds=0.01)

    saver.trigger()

    assert saved.wait(timeout=2)
    assert not saver.pending


def test_failed_save_is_not_raised() -> None:
    attempts: list[str] = []

    def failing_save() -> None:
        attempts.append("save")
        raise OSError("disk full")

    saver = DebouncedSaver(failing_save, delay_seconds=60)
    saver.trigger()

    saver.flush()

    assert attempts == ["save"]
