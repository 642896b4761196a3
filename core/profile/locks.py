"""
Per-owner mutation locks.

Profile mutations are read-modify-write against shared rows. Holding the
owner's lock from the first read until commit serializes writers for that
owner, while other owners and all readers proceed untouched.
"""

import threading
from collections.abc import Hashable, Iterator
from contextlib import contextmanager

from core.logging import get_logger

logger = get_logger("profile.locks")


class OwnerLockRegistry:
    """
    Thread-safe registry of one lock per owner key.

    Locks are reference counted and dropped once no thread holds or waits
    on them, so the registry does not grow with the number of owners seen.

    Usage:
        locks = OwnerLockRegistry()
        with locks.hold(owner_id):
            ...  # load, modify, commit
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._locks: dict[Hashable, threading.Lock] = {}
        self._waiters: dict[Hashable, int] = {}

    def _acquire_entry(self, key: Hashable) -> threading.Lock:
        with self._lock:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = threading.Lock()
            self._waiters[key] = self._waiters.get(key, 0) + 1
            return entry

    def _release_entry(self, key: Hashable) -> None:
        with self._lock:
            remaining = self._waiters[key] - 1
            if remaining:
                self._waiters[key] = remaining
            else:
                del self._waiters[key]
                del self._locks[key]

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        """Hold the lock for key for the duration of the block."""
        entry = self._acquire_entry(key)
        try:
            if not entry.acquire(blocking=False):
                logger.debug("owner_lock_contended", owner=key)
                entry.acquire()
            try:
                yield
            finally:
                entry.release()
        finally:
            self._release_entry(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._locks)


@contextmanager
def unlocked(key: Hashable) -> Iterator[None]:
    """Stand-in for OwnerLockRegistry.hold when serialization is disabled."""
    yield


# Process-wide registry used by the profile service
owner_locks = OwnerLockRegistry()


__all__ = ["OwnerLockRegistry", "owner_locks", "unlocked"]
