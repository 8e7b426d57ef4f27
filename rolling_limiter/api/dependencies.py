"""FastAPI dependency enforcing a sliding-window limit on routes."""

from __future__ import annotations

import logging
import math
from typing import Callable

from fastapi import HTTPException, Request, Response, status

from ..domain.decision import Decision
from ..limiter import AsyncRateLimiter
from .schemas import RateLimitStatus

logger = logging.getLogger(__name__)

KeyFunc = Callable[[Request], str]


def client_host(request: Request) -> str:
    """Identify callers by their remote address."""
    return request.client.host if request.client else ""


class RateLimit:
    """Route dependency that records one request per call.

    Example::

        limit = RateLimit(limiter, scope="token")

        @router.post("/token", dependencies=[Depends(limit)])
        def issue_token(...): ...
    """

    def __init__(
        self,
        limiter: AsyncRateLimiter,
        *,
        key_func: KeyFunc = client_host,
        scope: str = "",
    ) -> None:
        self._limiter = limiter
        self._key_func = key_func
        self._scope = scope

    def identifier(self, request: Request) -> str:
        key = self._key_func(request)
        return f"{self._scope}:{key}" if self._scope else key

    async def __call__(self, request: Request, response: Response) -> Decision:
        identifier = self.identifier(request)
        decision = await self._limiter.check(identifier)
        if not decision.allowed:
            logger.debug("rate limited %s for %d ms", identifier, decision.wait_ms)
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=RateLimitStatus.from_decision(decision).model_dump(),
                headers={"Retry-After": str(math.ceil(max(decision.wait_ms, 0) / 1000))},
            )
        response.headers["X-RateLimit-Remaining"] = str(decision.remaining)
        return decision
