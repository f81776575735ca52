"""Process-local reader-writer lock used by synchronized stores.

The exclusive side is reentrant for the thread holding it, and that thread
may also take the shared side. Readers never block each other, but a waiting
writer holds back new readers, so shared holds must not nest. Upgrading a
shared hold to an exclusive one is not supported and will deadlock.
"""
from __future__ import annotations
import threading
from contextlib import contextmanager
from typing import Iterator, Optional


class ReadWriteLock:
    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer: Optional[int] = None
        self._writer_depth = 0
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        me = threading.get_ident()
        with self._cond:
            if self._writer == me:
                # nested inside our own exclusive hold
                self._writer_depth += 1
                return
            # waiting writers take priority so a stream of readers cannot starve them
            while self._writer is not None or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        me = threading.get_ident()
        with self._cond:
            if self._writer == me:
                self._writer_depth -= 1
                return
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a shared hold")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        me = threading.get_ident()
        with self._cond:
            if self._writer == me:
                self._writer_depth += 1
                return
            self._writers_waiting += 1
            try:
                while self._writer is not None or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = me
            self._writer_depth = 1

    def release_write(self) -> None:
        with self._cond:
            if self._writer != threading.get_ident():
                raise RuntimeError("release_write() called by a thread not holding the lock")
            self._writer_depth -= 1
            if self._writer_depth == 0:
                self._writer = None
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

    def is_write_locked(self) -> bool:
        """Return True if the calling thread holds the exclusive side."""
        with self._cond:
            return self._writer == threading.get_ident()
