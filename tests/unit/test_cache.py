"""Tests for the TTL response cache."""

from __future__ import annotations

from athena.core.cache import CacheEntry, ResponseCache, make_key
from tests.fixtures.tools import FakeClock

# ─── make_key ─────────────────────────────────────────────────


class TestMakeKey:
    def test_prefixes_tool_name(self):
        assert make_key("ask", {"prompt": "hi"}) == 'ask:{"prompt":"hi"}'

    def test_argument_order_does_not_matter(self):
        a = make_key("t", {"a": 1, "b": {"x": 1, "y": 2}})
        b = make_key("t", {"b": {"y": 2, "x": 1}, "a": 1})
        assert a == b

    def test_different_tools_differ(self):
        assert make_key("a", {}) != make_key("b", {})

    def test_different_values_differ(self):
        assert make_key("t", {"n": 1}) != make_key("t", {"n": 2})

    def test_unicode_kept(self):
        assert make_key("t", {"q": "café"}) == 't:{"q":"café"}'


# ─── lookup / store ───────────────────────────────────────────


class TestLookupStore:
    def test_miss_on_empty(self, cache: ResponseCache):
        assert cache.lookup("k") is None

    def test_hit_after_store(self, cache: ResponseCache):
        cache.store("k", "data")
        assert cache.lookup("k") == "data"

    def test_fresh_until_ttl(self, cache: ResponseCache, clock: FakeClock):
        cache.store("k", "data")
        clock.advance(299.999)
        assert cache.lookup("k") == "data"

    def test_stale_at_ttl(self, cache: ResponseCache, clock: FakeClock):
        cache.store("k", "data")
        clock.advance(300.0)
        assert cache.lookup("k") is None

    def test_stale_entry_not_removed_by_lookup(self, cache: ResponseCache, clock: FakeClock):
        cache.store("k", "data")
        clock.advance(301)
        cache.lookup("k")
        assert "k" in cache

    def test_overwrite_refreshes_timestamp(self, cache: ResponseCache, clock: FakeClock):
        cache.store("k", "old")
        clock.advance(200)
        cache.store("k", "new")
        clock.advance(200)
        assert cache.lookup("k") == "new"
        assert len(cache) == 1

    def test_clear(self, cache: ResponseCache):
        cache.store("a", "1")
        cache.clear()
        assert len(cache) == 0

    def test_defaults(self):
        cache = ResponseCache()
        assert cache.ttl == 300.0
        assert cache.max_entries == 1000

    def test_entry_is_frozen(self):
        entry = CacheEntry(data="x", timestamp=1.0)
        assert entry.data == "x"
        assert entry.timestamp == 1.0


# ─── sweep ────────────────────────────────────────────────────


class TestSweep:
    def test_no_sweep_at_high_water_mark(self, clock: FakeClock):
        cache = ResponseCache(max_entries=3, clock=clock)
        for i in range(3):
            cache.store(f"k{i}", "v")
        clock.advance(1000)
        assert len(cache) == 3

    def test_sweep_removes_only_stale_entries(self, clock: FakeClock):
        cache = ResponseCache(max_entries=1000, clock=clock)
        for i in range(600):
            cache.store(f"old{i}", "v")
        clock.advance(300)
        for i in range(400):
            cache.store(f"new{i}", "v")
        assert len(cache) == 1000

        before = len(cache) + 1
        cache.store("trigger", "v")

        assert len(cache) == 401
        assert len(cache) <= before
        assert "old0" not in cache
        assert "new0" in cache
        assert cache.lookup("trigger") == "v"

    def test_sweep_keeps_everything_when_all_fresh(self, clock: FakeClock):
        cache = ResponseCache(max_entries=5, clock=clock)
        for i in range(7):
            cache.store(f"k{i}", "v")
        # Not a hard cap: fresh entries survive the sweep
        assert len(cache) == 7

    def test_sweep_returns_removed_count(self, clock: FakeClock):
        cache = ResponseCache(clock=clock)
        cache.store("a", "1")
        cache.store("b", "2")
        clock.advance(300)
        cache.store("c", "3")
        assert cache.sweep() == 2
        assert len(cache) == 1
