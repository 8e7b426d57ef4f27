"""Pure sliding-window decision engine."""

from __future__ import annotations

from typing import NamedTuple, Sequence

from .options import LimiterOptions


class Decision(NamedTuple):
    """Outcome of one check.

    ``remaining == -1`` marks a denial, in which case ``wait_ms`` is the
    recommended retry delay in whole milliseconds.
    """

    wait_ms: int
    remaining: int

    @property
    def allowed(self) -> bool:
        return self.remaining >= 0


def decide(now: int, timestamps: Sequence[int], options: LimiterOptions) -> Decision:
    """Turn the surviving window for an identifier into a decision.

    Parameters
    ----------
    now:
        Timestamp of the current request, in microseconds.
    timestamps:
        Ascending timestamps still inside the window, ending with the
        just-recorded candidate ``now``.
    options:
        Limits to enforce.

    Returns
    -------
    Decision
        ``(0, remaining)`` when allowed, ``(wait_ms, -1)`` when denied.
    """

    previous = timestamps[:-1]
    too_many = len(previous) >= options.max_in_interval

    gap: int | None = None
    if options.min_difference and previous:
        gap = now - previous[-1]
    too_close = gap is not None and gap < options.min_difference

    if not (too_many or too_close):
        return Decision(wait_ms=0, remaining=options.max_in_interval - len(previous) - 1)

    # wait for every violated rule to clear
    waits: list[int] = []
    if too_many:
        # the entry whose expiry brings the count back under the limit
        blocking = previous[len(previous) - options.max_in_interval]
        waits.append(blocking - now + options.interval)
    if too_close:
        waits.append(options.min_difference - gap)
    return Decision(wait_ms=max(waits) // 1000, remaining=-1)
