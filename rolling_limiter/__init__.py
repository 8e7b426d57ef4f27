"""Sliding-window rate limiting backed by local memory or Redis."""

from .clock import system_clock
from .domain import Decision, LimiterOptions, decide
from .errors import CallerUsageError, ConfigurationError, StoreError
from .limiter import AsyncRateLimiter, RateLimiter
from .stores import AsyncLocalWindowStore, AsyncRedisWindowStore, LocalWindowStore, RedisWindowStore

__all__ = [
    "AsyncLocalWindowStore",
    "AsyncRateLimiter",
    "AsyncRedisWindowStore",
    "CallerUsageError",
    "ConfigurationError",
    "Decision",
    "LimiterOptions",
    "LocalWindowStore",
    "RateLimiter",
    "RedisWindowStore",
    "StoreError",
    "decide",
    "system_clock",
]

__version__ = "0.1.0"
