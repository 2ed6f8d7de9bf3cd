"""Per-transaction locks serialising concurrent payment confirmations.

One TransactionLocks instance lives on the application; confirm routes hold
the lock for their transaction reference while they read the gateway status
and persist the result. An entry only exists while some request holds or
waits on it, so the map stays as small as the number of in-flight confirms.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class TransactionLocks:
    def __init__(self) -> None:
        self._guard = threading.Lock()
        # key -> [lock, number of holders and waiters]
        self._locks: dict[str, list] = {}

    def _acquire_entry(self, key: str) -> threading.Lock:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.Lock(), 0]
            entry[1] += 1
            return entry[0]

    def _release_entry(self, key: str) -> None:
        with self._guard:
            entry = self._locks[key]
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        lock = self._acquire_entry(key)
        try:
            with lock:
                yield
        finally:
            self._release_entry(key)

    def __len__(self) -> int:
        return len(self._locks)
