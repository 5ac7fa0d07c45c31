"""In-memory key-value store with per-entry expiration.

Expired entries are invisible to ``get``/``update`` right away and are
physically removed by ``sweep_expired``, either called by the owner or by
the background janitor.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
import logging
import time
from typing import Callable, Generic, Hashable, TypeVar

from .config import CacheConfig, load_config
from .errors import NotExistsError
from .janitor import Janitor
from .rwlock import RWLock

logger = logging.getLogger("timecache")

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

Duration = float | timedelta


@dataclass
class _Entry(Generic[V]):
    value: V
    expires_at: float


def _seconds(duration: Duration) -> float:
    if isinstance(duration, timedelta):
        duration = duration.total_seconds()
    return max(0.0, float(duration))


class ExpiringCache(Generic[K, V]):
    """Thread-safe map whose entries expire at an absolute time.

    ``get`` takes the read lock; ``store``, ``delete``, ``update`` and
    ``sweep_expired`` take the write lock. The ``transform`` passed to
    ``update`` runs with the write lock held and must not call back into the
    cache: the lock is not reentrant and such a call deadlocks.
    """

    def __init__(self, config: CacheConfig | None = None, *, now: Callable[[], float] | None = None) -> None:
        config = config or CacheConfig()
        self._now = now or time.time
        self._items: dict[K, _Entry[V]] = {}
        self._lock = RWLock()
        self._store_seconds = config.effective_store_seconds
        self._yield_every = max(0, int(config.janitor.yield_every))
        self._janitor: Janitor | None = None
        if config.janitor.sweep_period_seconds > 0:
            self._janitor = Janitor(self.sweep_expired, config.janitor.sweep_period_seconds)
            self._janitor.start()

    @classmethod
    def from_env(cls, *, now: Callable[[], float] | None = None) -> "ExpiringCache[K, V]":
        return cls(load_config(), now=now)

    @property
    def default_store_seconds(self) -> float:
        return self._store_seconds

    def store(self, key: K, value: V, duration: Duration) -> None:
        expires_at = self._now() + _seconds(duration)
        with self._lock.write_locked():
            self._items[key] = _Entry(value=value, expires_at=expires_at)

    def store_default(self, key: K, value: V) -> None:
        self.store(key, value, self._store_seconds)

    def get(self, key: K) -> V:
        now = self._now()
        with self._lock.read_locked():
            entry = self._items.get(key)
            if entry is None or entry.expires_at <= now:
                raise NotExistsError(key)
            return entry.value

    def get_or_set(self, key: K, factory: Callable[[], V], duration: Duration | None = None) -> V:
        """Return the live value for ``key`` or compute, store and return it.

        Not atomic: concurrent misses may each call ``factory``; the last
        store wins.
        """
        try:
            return self.get(key)
        except NotExistsError:
            pass
        value = factory()
        self.store(key, value, self._store_seconds if duration is None else duration)
        return value

    def delete(self, key: K) -> None:
        with self._lock.write_locked():
            self._items.pop(key, None)

    def update(self, key: K, duration: Duration, transform: Callable[[V], V]) -> None:
        now = self._now()
        expires_at = now + _seconds(duration)
        with self._lock.write_locked():
            entry = self._items.get(key)
            if entry is None or entry.expires_at <= now:
                raise NotExistsError(key)
            value = transform(entry.value)
            self._items[key] = _Entry(value=value, expires_at=expires_at)

    def count(self) -> int:
        with self._lock.read_locked():
            return len(self._items)

    def __len__(self) -> int:
        return self.count()

    def sweep_expired(self) -> int:
        """Remove every entry expired as of the start of the sweep.

        With ``yield_every`` set, the write lock is released and reacquired
        after each ``yield_every`` inspected keys so waiting callers get in.
        Keys are re-read after every yield point; the pass is not a snapshot.
        """
        now = self._now()
        removed = 0
        self._lock.acquire_write()
        try:
            keys = list(self._items)
            for inspected, key in enumerate(keys, start=1):
                entry = self._items.get(key)
                if entry is not None and entry.expires_at <= now:
                    del self._items[key]
                    removed += 1
                if self._yield_every and inspected % self._yield_every == 0:
                    self._lock.release_write()
                    self._lock.acquire_write()
        finally:
            self._lock.release_write()
        if removed:
            logger.debug("Swept %s expired entries", removed)
        return removed

    @property
    def janitor_running(self) -> bool:
        return self._janitor is not None and self._janitor.running

    def close(self, timeout: float | None = None) -> None:
        if self._janitor is not None:
            self._janitor.stop(timeout)

    def __enter__(self) -> "ExpiringCache[K, V]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
