"""HTTP integration for FastAPI applications."""

from .dependencies import RateLimit, client_host
from .schemas import RateLimitStatus

__all__ = ["RateLimit", "RateLimitStatus", "client_host"]
