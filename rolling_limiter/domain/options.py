"""Immutable limiter configuration."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class LimiterOptions:
    """Sliding-window limits shared by every identifier of one limiter.

    Durations are integer microseconds. ``namespace`` prefixes every key the
    limiter writes; ``None`` lets the facade pick one suited to its store.
    """

    interval: int
    max_in_interval: int
    min_difference: int | None = None
    namespace: str | None = None
    count_denied: bool = False

    def __post_init__(self) -> None:
        if not self.interval > 0:
            raise ConfigurationError("interval must be a positive number of microseconds")
        if not self.max_in_interval > 0:
            raise ConfigurationError("max_in_interval must be a positive integer")
        if self.min_difference is not None and self.min_difference < 0:
            raise ConfigurationError("min_difference cannot be negative")

    @classmethod
    def from_milliseconds(
        cls,
        *,
        interval_ms: float,
        max_in_interval: int,
        min_difference_ms: float | None = None,
        namespace: str | None = None,
        count_denied: bool = False,
    ) -> "LimiterOptions":
        """Build options from millisecond durations."""
        return cls(
            interval=int(interval_ms * 1000),
            max_in_interval=max_in_interval,
            min_difference=None if min_difference_ms is None else int(min_difference_ms * 1000),
            namespace=namespace,
            count_denied=count_denied,
        )
