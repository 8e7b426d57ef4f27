"""Rate limiter facades binding options, a clock, and a window store."""

from __future__ import annotations

import secrets

from .clock import Clock, system_clock
from .domain.contracts import AsyncWindowStore, WindowStore
from .domain.decision import Decision, decide
from .domain.options import LimiterOptions
from .errors import CallerUsageError


def _resolve_namespace(options: LimiterOptions, shared: bool) -> str:
    """Return the key prefix, inventing a private one for unnamed shared limiters."""
    if options.namespace is not None:
        return options.namespace
    if shared:
        return f"rate-limiter-{secrets.token_hex(6)}"
    return ""


def _normalise_identifier(identifier: object) -> str:
    if identifier is None:
        return ""
    if not isinstance(identifier, str):
        raise CallerUsageError(
            f"identifier must be a string, got {type(identifier).__name__}"
        )
    return identifier


class RateLimiter:
    """Synchronous sliding-window limiter.

    Parameters
    ----------
    options:
        Validated limits shared by every identifier.
    store:
        Backend holding the per-identifier windows, chosen once here.
    clock:
        Zero-argument callable returning integer microseconds.
    """

    def __init__(
        self,
        options: LimiterOptions,
        store: WindowStore,
        *,
        clock: Clock = system_clock,
    ) -> None:
        self._options = options
        self._store = store
        self._clock = clock
        self._namespace = _resolve_namespace(options, store.shared)

    @property
    def options(self) -> LimiterOptions:
        return self._options

    @property
    def store(self) -> WindowStore:
        return self._store

    @property
    def namespace(self) -> str:
        return self._namespace

    def key_for(self, identifier: str = "") -> str:
        """Return the storage key used for ``identifier``."""
        return self._namespace + identifier

    def check(self, identifier: str | None = "") -> Decision:
        """Record a request for ``identifier`` and decide whether it may proceed.

        Raises
        ------
        CallerUsageError
            If ``identifier`` is not a string.
        StoreError
            If the store could not complete the evict-and-record batch; no
            decision is produced in that case. Also raised when a denied
            request could not be discarded afterwards.
        """

        key = self.key_for(_normalise_identifier(identifier))
        now = self._clock()
        recorded = self._store.evict_and_record(key, now, self._options.interval)
        decision = decide(now, recorded.timestamps, self._options)
        if not decision.allowed and not self._options.count_denied:
            self._store.forget(key, recorded.receipt)
        return decision

    def allow(self, identifier: str | None = "") -> bool:
        """Return ``True`` when the request is within the configured rate limit."""
        return self.check(identifier).allowed

    def close(self) -> None:
        self._store.close()

    def __enter__(self) -> "RateLimiter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class AsyncRateLimiter:
    """Awaitable sliding-window limiter for I/O-bound stores."""

    def __init__(
        self,
        options: LimiterOptions,
        store: AsyncWindowStore,
        *,
        clock: Clock = system_clock,
    ) -> None:
        self._options = options
        self._store = store
        self._clock = clock
        self._namespace = _resolve_namespace(options, store.shared)

    @property
    def options(self) -> LimiterOptions:
        return self._options

    @property
    def store(self) -> AsyncWindowStore:
        return self._store

    @property
    def namespace(self) -> str:
        return self._namespace

    def key_for(self, identifier: str = "") -> str:
        return self._namespace + identifier

    async def check(self, identifier: str | None = "") -> Decision:
        """Awaitable form of :meth:`RateLimiter.check`; one batch per call."""
        key = self.key_for(_normalise_identifier(identifier))
        now = self._clock()
        recorded = await self._store.evict_and_record(key, now, self._options.interval)
        decision = decide(now, recorded.timestamps, self._options)
        if not decision.allowed and not self._options.count_denied:
            await self._store.forget(key, recorded.receipt)
        return decision

    async def allow(self, identifier: str | None = "") -> bool:
        return (await self.check(identifier)).allowed

    async def close(self) -> None:
        await self._store.close()

    async def __aenter__(self) -> "AsyncRateLimiter":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
