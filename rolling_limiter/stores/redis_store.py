"""Redis-backed sliding window storage shared by a fleet of processes."""

from __future__ import annotations

import secrets
from typing import Any, Iterable, Sequence

from redis import Redis
from redis.asyncio import Redis as AsyncRedis
from redis.exceptions import RedisError

from ..domain.contracts import RecordedWindow
from ..errors import StoreError

BATCH_SIZE = 4


def expiry_seconds(interval: int) -> int:
    """Key time-to-live for a window of ``interval`` microseconds, rounded up."""
    return -(-interval // 1_000_000)


def new_member(now: int) -> str:
    """Sorted-set member for a timestamp; the nonce keeps equal timestamps distinct."""
    return f"{now}:{secrets.token_hex(4)}"


def _queue_batch(pipe: Any, key: str, now: int, interval: int, member: str) -> None:
    """Queue evict, read, insert and expire on a MULTI/EXEC pipeline."""
    pipe.zremrangebyscore(key, 0, now - interval)
    pipe.zrange(key, 0, -1, withscores=True)
    pipe.zadd(key, {member: now})
    pipe.expire(key, expiry_seconds(interval))


def _scores(entries: Iterable[Sequence[Any]]) -> list[int]:
    return [int(float(score)) for _member, score in entries]


def _parse_batch(results: Sequence[Any], now: int) -> list[int]:
    """Validate a batch result and return the ascending window including ``now``.

    ``results`` holds one entry per queued command; failed commands appear as
    exception instances. The first failure aborts the whole check.
    """

    for result in results:
        if isinstance(result, Exception):
            raise StoreError(f"rate limit batch failed: {result}") from result
    if len(results) != BATCH_SIZE:
        raise StoreError(f"rate limit batch returned {len(results)} results, expected {BATCH_SIZE}")
    timestamps = _scores(results[1])
    timestamps.append(now)
    return timestamps


class RedisWindowStore:
    """Sliding windows kept in Redis sorted sets scored by microsecond timestamps."""

    shared = True

    def __init__(self, client: Redis, *, owns_client: bool = False) -> None:
        """Store the Redis client; ``owns_client`` makes :meth:`close` close it."""
        self._client = client
        self._owns_client = owns_client

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> "RedisWindowStore":
        return cls(Redis.from_url(url, **kwargs), owns_client=True)

    @property
    def client(self) -> Redis:
        return self._client

    def evict_and_record(self, key: str, now: int, interval: int) -> RecordedWindow:
        """Run the four-command batch atomically and return the surviving window."""
        member = new_member(now)
        try:
            with self._client.pipeline(transaction=True) as pipe:
                _queue_batch(pipe, key, now, interval, member)
                results = pipe.execute(raise_on_error=False)
        except RedisError as exc:
            raise StoreError(f"rate limit batch failed: {exc}") from exc
        return RecordedWindow(timestamps=_parse_batch(results, now), receipt=member)

    def forget(self, key: str, receipt: Any) -> None:
        try:
            self._client.zrem(key, receipt)
        except RedisError as exc:
            raise StoreError(f"failed to discard denied request: {exc}") from exc

    def peek(self, key: str) -> list[int]:
        """Return the stored timestamps without evicting anything."""
        try:
            return _scores(self._client.zrange(key, 0, -1, withscores=True))
        except RedisError as exc:
            raise StoreError(str(exc)) from exc

    def reset(self, key: str) -> None:
        try:
            self._client.delete(key)
        except RedisError as exc:
            raise StoreError(str(exc)) from exc

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class AsyncRedisWindowStore:
    """``redis.asyncio`` variant of :class:`RedisWindowStore`."""

    shared = True

    def __init__(self, client: AsyncRedis, *, owns_client: bool = False) -> None:
        self._client = client
        self._owns_client = owns_client

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> "AsyncRedisWindowStore":
        return cls(AsyncRedis.from_url(url, **kwargs), owns_client=True)

    @property
    def client(self) -> AsyncRedis:
        return self._client

    async def evict_and_record(self, key: str, now: int, interval: int) -> RecordedWindow:
        member = new_member(now)
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                _queue_batch(pipe, key, now, interval, member)
                results = await pipe.execute(raise_on_error=False)
        except RedisError as exc:
            raise StoreError(f"rate limit batch failed: {exc}") from exc
        return RecordedWindow(timestamps=_parse_batch(results, now), receipt=member)

    async def forget(self, key: str, receipt: Any) -> None:
        try:
            await self._client.zrem(key, receipt)
        except RedisError as exc:
            raise StoreError(f"failed to discard denied request: {exc}") from exc

    async def peek(self, key: str) -> list[int]:
        try:
            return _scores(await self._client.zrange(key, 0, -1, withscores=True))
        except RedisError as exc:
            raise StoreError(str(exc)) from exc

    async def reset(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except RedisError as exc:
            raise StoreError(str(exc)) from exc

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
