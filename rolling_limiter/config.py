from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

from .domain.options import LimiterOptions


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name, "")
    return float(raw) if raw else None


@dataclass(frozen=True)
class Settings:
    """Runtime configuration values read from the process environment."""

    rate_limit_backend: str = os.getenv("RATE_LIMIT_BACKEND", "memory").lower()
    redis_url: str = os.getenv("REDIS_URL", "")
    interval_ms: float = float(os.getenv("RATE_LIMIT_INTERVAL_MS", "60000"))
    max_in_interval: int = int(os.getenv("RATE_LIMIT_MAX_IN_INTERVAL", "20"))
    min_difference_ms: float | None = _optional_float("RATE_LIMIT_MIN_DIFFERENCE_MS")
    namespace: str | None = os.getenv("RATE_LIMIT_NAMESPACE") or None
    count_denied: bool = os.getenv("RATE_LIMIT_COUNT_DENIED", "false").lower() in {"1", "true", "yes"}

    def limiter_options(self) -> LimiterOptions:
        """Translate millisecond settings into validated limiter options."""
        return LimiterOptions.from_milliseconds(
            interval_ms=self.interval_ms,
            max_in_interval=self.max_in_interval,
            min_difference_ms=self.min_difference_ms,
            namespace=self.namespace,
            count_denied=self.count_denied,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached Settings instance for the running process."""
    return Settings()
