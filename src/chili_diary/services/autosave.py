"""Debounced background saving."""

import logging
import threading
from collections.abc import Callable

_logger = logging.getLogger(__name__)


class DebouncedSaver:
    """Coalesces bursts of save requests into one call after a quiet period.

    A newer trigger replaces the pending timer instead of queueing behind it.
    """

    def __init__(self, save: Callable[[], None], delay_seconds: float = 0.6) -> None:
        self._save = save
        self._delay_seconds = delay_seconds
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def trigger(self) -> None:
        """Schedule a save, superseding any save that has not fired yet."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            timer = threading.Timer(
                self._delay_seconds, self._fire, args=(self._generation,)
            )
            timer.daemon = True
            self._timer = timer
            timer.start()

    def flush(self) -> None:
        """Run a pending save immediately, if there is one."""
        with self._lock:
            if self._timer is None:
                return
            self._timer.cancel()
            self._timer = None
            self._generation += 1
        self._run()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._generation += 1

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
        self._run()

    def _run(self) -> None:
        try:
            self._save()
        except Exception:
            _logger.warning("Autosave failed; will retry on next change", exc_info=True)
