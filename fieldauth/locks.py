"""
Per-key locking.

Registration, login and delegation are check-then-act sequences across the
credential store and the project registry. Holding the lock for every
contested key keeps the uniqueness rules intact under concurrent requests
within one process.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class KeyedLock:
    """
    A lock per string key, created on first use.

    Usage:
        locks = KeyedLock()
        with locks.hold("coordinator:+155501", "project:Alpha"):
            ...
    """

    def __init__(self):
        self._locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def _get(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, *keys: str) -> Iterator[None]:
        """
        Acquire the locks for all keys, in sorted order to avoid deadlocks.
        """
        ordered = sorted(set(keys))
        acquired = []
        try:
            for key in ordered:
                lock = self._get(key)
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


def coordinator_key(phone_number: str) -> str:
    return f"coordinator:{phone_number}"


def project_key(project_name: str) -> str:
    return f"project:{project_name}"


def member_key(phone_number: str) -> str:
    return f"member:{phone_number}"
