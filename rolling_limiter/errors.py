"""Exception types raised by the rate limiter."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when limiter options violate their constraints."""


class StoreError(RuntimeError):
    """Raised when a window store cannot complete an evict-and-record batch.

    The underlying client exception is always chained as ``__cause__``.
    """


class CallerUsageError(TypeError):
    """Raised for an invalid call shape, before any store interaction."""
