"""Readers-writer lock used by the cache."""

from __future__ import annotations

from contextlib import contextmanager
import threading
from typing import Iterator


class RWLock:
    """Many readers or one writer.

    Writers waiting for the lock block newly arriving readers and are served
    in arrival order. When a writer releases, the readers that were already
    queued are admitted before any writer (including the one that just
    released) can enter again.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_readers = 0
        self._waiting_writers = 0
        self._admit = 0
        # bumped by every write release; readers queued before it may pass
        # ahead of waiting writers
        self._admit_gen = 0
        self._next_ticket = 0
        self._serving = 0

    def acquire_read(self) -> None:
        with self._cond:
            gen = self._admit_gen
            self._waiting_readers += 1
            while self._writer or (self._waiting_writers and gen == self._admit_gen):
                self._cond.wait()
            self._waiting_readers -= 1
            if gen != self._admit_gen:
                self._admit -= 1
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read without a matching acquire_read")
            self._readers -= 1
            if not self._readers:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            ticket = self._next_ticket
            self._next_ticket += 1
            self._waiting_writers += 1
            while self._writer or self._readers or self._admit or self._serving != ticket:
                self._cond.wait()
            self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write without a matching acquire_write")
            self._writer = False
            self._serving += 1
            self._admit_gen += 1
            self._admit = self._waiting_readers
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
