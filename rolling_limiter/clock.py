"""Clock sources producing integer microsecond timestamps."""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]


def system_clock() -> int:
    """Return the current wall-clock time in whole microseconds since the epoch."""
    return time.time_ns() // 1000
