"""In-memory sliding window storage for single-process deployments."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Any

from ..domain.contracts import RecordedWindow

logger = logging.getLogger(__name__)


class LocalWindowStore:
    """Thread-safe per-key timestamp lists with deferred cleanup of idle keys.

    Each key carries a deadline, its newest timestamp plus the interval. Keys
    are kept in deadline order, and every access drops the keys whose deadline
    has passed, so idle windows are released without timers or threads.
    """

    shared = False

    def __init__(self) -> None:
        """Initialise per-key storage, cleanup deadlines, and the guarding lock."""
        self._windows: dict[str, list[int]] = {}
        self._deadlines: OrderedDict[str, int] = OrderedDict()
        self._lock = threading.Lock()

    def evict_and_record(self, key: str, now: int, interval: int) -> RecordedWindow:
        """Drop expired entries for ``key``, append ``now``, and return the survivors."""
        clear_before = now - interval
        with self._lock:
            self._sweep(now)
            window = [ts for ts in self._windows.get(key, ()) if ts > clear_before]
            window.append(now)
            self._windows[key] = window
            self._deadlines[key] = max(window) + interval
            self._deadlines.move_to_end(key)
            return RecordedWindow(timestamps=list(window), receipt=now)

    def forget(self, key: str, receipt: Any) -> None:
        """Remove the most recent occurrence of ``receipt`` from the key's window."""
        with self._lock:
            window = self._windows.get(key)
            if not window:
                return
            for index in range(len(window) - 1, -1, -1):
                if window[index] == receipt:
                    del window[index]
                    break

    def sweep(self, now: int) -> int:
        """Release every window idle at ``now``; return how many were dropped."""
        with self._lock:
            return self._sweep(now)

    def peek(self, key: str) -> list[int]:
        """Return a copy of the stored timestamps without evicting anything."""
        with self._lock:
            return list(self._windows.get(key, ()))

    def reset(self, key: str) -> None:
        """Delete the window for ``key``."""
        with self._lock:
            self._windows.pop(key, None)
            self._deadlines.pop(key, None)

    def close(self) -> None:
        """Release all stored windows."""
        with self._lock:
            self._windows.clear()
            self._deadlines.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)

    def _sweep(self, now: int) -> int:
        """Drop idle keys from the front of the deadline order; caller holds the lock."""
        dropped = 0
        while self._deadlines:
            key, deadline = next(iter(self._deadlines.items()))
            # every timestamp of the key is at or before now - interval
            if deadline > now:
                break
            del self._deadlines[key]
            self._windows.pop(key, None)
            dropped += 1
        if dropped:
            logger.debug("evicted %d idle rate limit windows", dropped)
        return dropped


class AsyncLocalWindowStore:
    """Awaitable facade over :class:`LocalWindowStore` for async limiters."""

    shared = False

    def __init__(self, store: LocalWindowStore | None = None) -> None:
        self._store = store if store is not None else LocalWindowStore()

    @property
    def sync_store(self) -> LocalWindowStore:
        return self._store

    async def evict_and_record(self, key: str, now: int, interval: int) -> RecordedWindow:
        return self._store.evict_and_record(key, now, interval)

    async def forget(self, key: str, receipt: Any) -> None:
        self._store.forget(key, receipt)

    async def peek(self, key: str) -> list[int]:
        return self._store.peek(key)

    async def reset(self, key: str) -> None:
        self._store.reset(key)

    async def close(self) -> None:
        self._store.close()
