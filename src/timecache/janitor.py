"""Background thread that sweeps expired cache entries on a fixed period."""

from __future__ import annotations

import inspect
import logging
import threading
from typing import Callable
import weakref

logger = logging.getLogger("timecache")


class Janitor:
    """Calls ``sweep`` every ``period_seconds`` until stopped.

    A bound-method ``sweep`` is held weakly: once its owner is garbage
    collected the thread exits at the next tick instead of keeping the
    owner alive.
    """

    def __init__(self, sweep: Callable[[], int], period_seconds: float, *, name: str = "timecache-janitor") -> None:
        if period_seconds <= 0:
            raise ValueError("period_seconds must be positive")
        if inspect.ismethod(sweep):
            self._sweep_ref: Callable[[], Callable[[], int] | None] = weakref.WeakMethod(sweep)
        else:
            self._sweep_ref = lambda: sweep
        self._period = float(period_seconds)
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def start(self) -> None:
        logger.debug("Starting janitor (period=%ss)", self._period)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def _run(self) -> None:
        try:
            while not self._stop.wait(self._period):
                if not self._tick():
                    logger.debug("Janitor owner collected")
                    break
        except Exception:
            logger.exception("Janitor sweep failed; janitor stopped")
            return
        logger.debug("Janitor stopped")

    def _tick(self) -> bool:
        # the strong reference lives only for the duration of one sweep
        sweep = self._sweep_ref()
        if sweep is None:
            return False
        sweep()
        return True
