# parking_simulator/lot/rwlock.py
"""Reader-writer lock for the lot's spot table."""

import threading
from contextlib import contextmanager


class ReadWriteLock:
    """
    Many concurrent readers OR one exclusive writer.

    Writer preference: once a writer is waiting, new readers wait behind it,
    so a busy observer cannot starve arrivals and departures.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a reader")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without a writer")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self):
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self):
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    @property
    def reader_count(self) -> int:
        return self._readers

    @property
    def is_writing(self) -> bool:
        return self._writer

    def __repr__(self) -> str:
        if self._writer:
            state = "writing"
        elif self._readers:
            state = f"reading({self._readers})"
        else:
            state = "free"
        return f"<ReadWriteLock({state})>"
