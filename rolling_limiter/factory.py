"""Construct limiter facades from process settings."""

from __future__ import annotations

import logging

from .config import Settings, get_settings
from .limiter import AsyncRateLimiter, RateLimiter
from .stores.memory import AsyncLocalWindowStore, LocalWindowStore
from .stores.redis_store import AsyncRedisWindowStore, RedisWindowStore

logger = logging.getLogger(__name__)


def build_rate_limiter(settings: Settings | None = None) -> RateLimiter:
    """Instantiate the configured limiter backend, preferring Redis when available."""
    settings = settings or get_settings()
    options = settings.limiter_options()
    if settings.rate_limit_backend == "redis" and settings.redis_url:
        try:
            store = RedisWindowStore.from_url(settings.redis_url)
            # ensure connectivity early to fail fast and fall back
            store.client.ping()
        except Exception as exc:  # pragma: no cover - depends on a live server
            logger.warning("redis rate limiter unavailable, falling back to in-memory: %s", exc)
        else:
            logger.info("rate limiter configured for redis backend at %s", settings.redis_url)
            return RateLimiter(options, store)

    logger.info("rate limiter using in-memory backend")
    return RateLimiter(options, LocalWindowStore())


def build_async_rate_limiter(settings: Settings | None = None) -> AsyncRateLimiter:
    """Async counterpart of :func:`build_rate_limiter`.

    Connectivity is not probed because no event loop is assumed at build time;
    the first failed check surfaces as ``StoreError``.
    """
    settings = settings or get_settings()
    options = settings.limiter_options()
    if settings.rate_limit_backend == "redis" and settings.redis_url:
        logger.info("async rate limiter configured for redis backend at %s", settings.redis_url)
        return AsyncRateLimiter(options, AsyncRedisWindowStore.from_url(settings.redis_url))

    logger.info("async rate limiter using in-memory backend")
    return AsyncRateLimiter(options, AsyncLocalWindowStore())
