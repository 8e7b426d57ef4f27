"""Capability contracts implemented by window store backends."""

from __future__ import annotations

from typing import Any, NamedTuple, Protocol


class RecordedWindow(NamedTuple):
    """Result of one evict-and-record call.

    ``timestamps`` is ascending and ends with the recorded candidate;
    ``receipt`` identifies that candidate for a later ``forget``.
    """

    timestamps: list[int]
    receipt: Any


class WindowStore(Protocol):
    """Synchronous per-key timestamp storage."""

    shared: bool

    def evict_and_record(self, key: str, now: int, interval: int) -> RecordedWindow:
        """Drop entries ``<= now - interval``, record ``now``, return the survivors."""
        ...

    def forget(self, key: str, receipt: Any) -> None:
        """Remove a single recorded candidate."""
        ...

    def close(self) -> None:
        ...


class AsyncWindowStore(Protocol):
    """Asynchronous counterpart of :class:`WindowStore`."""

    shared: bool

    async def evict_and_record(self, key: str, now: int, interval: int) -> RecordedWindow:
        ...

    async def forget(self, key: str, receipt: Any) -> None:
        ...

    async def close(self) -> None:
        ...
