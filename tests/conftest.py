from __future__ import annotations

import pytest


class ManualClock:
    """Deterministic microsecond clock advanced explicitly by tests."""

    def __init__(self, start: int = 1_700_000_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += int(ms * 1000)

    def set_ms(self, offset_ms: float, *, origin: int = 1_700_000_000_000_000) -> None:
        self.now = origin + int(offset_ms * 1000)


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()
