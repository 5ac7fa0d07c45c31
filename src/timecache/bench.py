"""Measure foreground `get` latency while a sweep runs on another thread."""

from __future__ import annotations

from dataclasses import dataclass
import threading
import time

from .cache import ExpiringCache
from .config import CacheConfig, JanitorConfig


@dataclass(frozen=True)
class BenchResult:
    entries: int
    removed: int
    sweep_seconds: float
    max_get_seconds: float
    gets: int


def fill(cache: ExpiringCache[int, int], entries: int) -> None:
    # odd keys are already expired, even keys live for the default duration
    for key in range(entries):
        if key % 2:
            cache.store(key, key, 0)
        else:
            cache.store_default(key, key)


def run_bench(entries: int, yield_every: int) -> BenchResult:
    config = CacheConfig(janitor=JanitorConfig(sweep_period_seconds=0, yield_every=yield_every))
    with ExpiringCache[int, int](config) as cache:
        fill(cache, entries)

        done = threading.Event()
        outcome: dict[str, float | int] = {}
        failures: list[Exception] = []

        def sweep() -> None:
            started = time.perf_counter()
            try:
                outcome["removed"] = cache.sweep_expired()
                outcome["elapsed"] = time.perf_counter() - started
            except Exception as exc:
                failures.append(exc)
            finally:
                done.set()

        worker = threading.Thread(target=sweep, name="timecache-bench-sweep")
        worker.start()
        max_get = 0.0
        gets = 0
        while not done.is_set():
            started = time.perf_counter()
            cache.get(0)
            max_get = max(max_get, time.perf_counter() - started)
            gets += 1
        worker.join()
        if failures:
            raise failures[0]

    return BenchResult(
        entries=entries,
        removed=int(outcome["removed"]),
        sweep_seconds=float(outcome["elapsed"]),
        max_get_seconds=max_get,
        gets=gets,
    )
