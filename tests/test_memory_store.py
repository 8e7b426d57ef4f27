"""Tests for the in-memory window store."""

from __future__ import annotations

import threading

from rolling_limiter import LimiterOptions, RateLimiter
from rolling_limiter.stores.memory import LocalWindowStore

SECOND = 1_000_000


def test_evict_and_record_appends_candidate():
    store = LocalWindowStore()
    assert store.evict_and_record("a", 10, SECOND).timestamps == [10]
    recorded = store.evict_and_record("a", 20, SECOND)
    assert recorded.timestamps == [10, 20]
    assert recorded.receipt == 20


def test_boundary_entry_is_evicted():
    store = LocalWindowStore()
    store.evict_and_record("a", 0, SECOND)
    store.evict_and_record("a", 1, SECOND)
    # exactly one interval after the first entry
    assert store.evict_and_record("a", SECOND, SECOND).timestamps == [1, SECOND]


def test_keys_are_independent():
    store = LocalWindowStore()
    store.evict_and_record("a", 1, SECOND)
    store.evict_and_record("a", 2, SECOND)
    assert store.evict_and_record("b", 3, SECOND).timestamps == [3]
    assert store.peek("a") == [1, 2]


def test_forget_removes_only_one_duplicate():
    store = LocalWindowStore()
    store.evict_and_record("a", 5, SECOND)
    recorded = store.evict_and_record("a", 5, SECOND)
    store.forget("a", recorded.receipt)
    assert store.peek("a") == [5]


def test_idle_windows_are_released_on_later_access():
    store = LocalWindowStore()
    store.evict_and_record("a", 0, SECOND)
    store.evict_and_record("b", 10, SECOND)
    store.evict_and_record("c", SECOND, SECOND)
    # "a" expired exactly at its deadline, "b" is still inside its window
    assert store.peek("a") == []
    assert store.peek("b") == [10]
    assert len(store) == 2


def test_recent_activity_postpones_release():
    store = LocalWindowStore()
    store.evict_and_record("a", 0, SECOND)
    store.evict_and_record("b", 1, SECOND)
    store.evict_and_record("a", SECOND // 2, SECOND)
    assert store.sweep(SECOND + 1) == 1
    assert store.peek("a") == [0, SECOND // 2]
    assert store.peek("b") == []


def test_sweep_keeps_windows_with_live_timestamps():
    store = LocalWindowStore()
    store.evict_and_record("a", 100, SECOND)
    assert store.sweep(SECOND + 99) == 0
    assert store.peek("a") == [100]
    assert store.sweep(SECOND + 100) == 1
    assert len(store) == 0


def test_reset_and_close_release_windows():
    store = LocalWindowStore()
    store.evict_and_record("a", 1, SECOND)
    store.evict_and_record("b", 1, SECOND)
    store.reset("a")
    assert store.peek("a") == []
    assert store.peek("b") == [1]
    store.close()
    assert len(store) == 0
    # a reset key does not linger in the cleanup order
    assert store.sweep(10 * SECOND) == 0


def test_many_identifiers_start_no_threads():
    limiter = RateLimiter(
        LimiterOptions(interval=60 * SECOND, max_in_interval=20),
        LocalWindowStore(),
    )
    before = threading.active_count()
    for index in range(2000):
        assert limiter.allow(f"client-{index}")
    assert threading.active_count() <= before
    assert len(limiter.store) == 2000
    limiter.close()
