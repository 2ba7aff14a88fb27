"""Keyed locks for serialising writers of the same record.

Two orders that share products must not deadlock, so callers always take
every lock they need through ``hold()``, which acquires in sorted key order.
The locks are re-entrant: a handler holding a product lock can call the
StockLedger, which takes the same lock again. A lock exists only while some
thread holds or waits for it.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Hashable, Iterable, Iterator


class _KeyLock:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.users = 0


class LockRegistry:

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, _KeyLock] = {}

    def keys_in_use(self) -> list[str]:
        with self._guard:
            return sorted(self._locks)

    @contextmanager
    def hold(self, keys: Iterable[Hashable]) -> Iterator[list[str]]:
        """Acquire the lock of every key, lowest key first.

        Yields the ordered keys. Locks are released in reverse order on exit,
        including when only some of them were acquired.
        """
        ordered = sorted({str(key) for key in keys})
        checked_out: list[tuple[str, _KeyLock]] = []
        acquired: list[_KeyLock] = []
        try:
            for key in ordered:
                entry = self._check_out(key)
                checked_out.append((key, entry))
                entry.lock.acquire()
                acquired.append(entry)
            yield ordered
        finally:
            for entry in reversed(acquired):
                entry.lock.release()
            for key, entry in reversed(checked_out):
                self._check_in(key, entry)

    def _check_out(self, key: str) -> _KeyLock:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = _KeyLock()
            entry.users += 1
            return entry

    def _check_in(self, key: str, entry: _KeyLock) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0:
                del self._locks[key]
