"""Window store backends."""

from .memory import AsyncLocalWindowStore, LocalWindowStore
from .redis_store import AsyncRedisWindowStore, RedisWindowStore

__all__ = [
    "AsyncLocalWindowStore",
    "AsyncRedisWindowStore",
    "LocalWindowStore",
    "RedisWindowStore",
]
