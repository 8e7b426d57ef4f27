"""Pure limiter domain: options, decision engine, and store contracts."""

from .contracts import AsyncWindowStore, RecordedWindow, WindowStore
from .decision import Decision, decide
from .options import LimiterOptions

__all__ = [
    "AsyncWindowStore",
    "Decision",
    "LimiterOptions",
    "RecordedWindow",
    "WindowStore",
    "decide",
]
