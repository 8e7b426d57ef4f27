"""Pydantic payloads exchanged by the HTTP integration."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..domain.decision import Decision


class RateLimitStatus(BaseModel):
    """Serialised representation of a limiter decision."""

    detail: str = "rate limited"
    wait_ms: int = Field(..., ge=0)
    remaining: int = Field(..., ge=-1)

    @classmethod
    def from_decision(cls, decision: Decision) -> "RateLimitStatus":
        """Build a response model from a decision."""
        return cls(
            detail="ok" if decision.allowed else "rate limited",
            wait_ms=max(decision.wait_ms, 0),
            remaining=decision.remaining,
        )
