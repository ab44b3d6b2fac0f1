"""
Tests for the read-through TTL cache and the cached reference readers
"""
import asyncio
import json
from unittest.mock import MagicMock

import httpx
import redis

from tour_admin.cache.readers import ReferenceReaders, build_cache_backend
from tour_admin.cache.ttl_cache import (
    CachedReader,
    InMemoryTTLCache,
    RedisTTLCache,
    build_cache_key,
)
from tour_admin.core.config import Settings
from tour_admin.core.exceptions import error_result
from tour_admin.services.rest import RestClientFactory
from tour_admin.tests.utils.backend import FakeBackend


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingFetch:
    """Returns queued results in order and counts calls"""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def __call__(self, params):
        self.calls += 1
        return self.results.pop(0)


def run(coro):
    return asyncio.run(coro)


class TestCacheKey:
    def test_deterministic_and_normalized(self):
        fields = ("page", "countryId", "isActive")
        assert build_cache_key("cities", {"page": 1, "countryId": " c-mx ", "isActive": True}, fields) == (
            "cities|1|c-mx|true"
        )
        assert build_cache_key("cities", {"page": 1}, fields) == "cities|1||"

    def test_separator_inside_values_does_not_collide(self):
        fields = ("country", "city", "category")
        first = build_cache_key("price-range", {"country": "A|B", "category": "C"}, fields)
        second = build_cache_key("price-range", {"country": "A", "city": "B|", "category": "C"}, fields)
        assert first != second
        assert build_cache_key("x", {"country": "a\\"}, ("country", "city")) != build_cache_key(
            "x", {"country": "a", "city": "\\"}, ("country", "city")
        )

    def test_unlisted_fields_are_ignored(self):
        fields = ("page",)
        assert build_cache_key("x", {"page": 2, "noise": "a"}, fields) == build_cache_key("x", {"page": 2}, fields)


class TestCachedReader:
    def _reader(self, fetch, clock, ttl=300):
        return CachedReader("cities", InMemoryTTLCache(clock=clock), fetch, ("page",), ttl=ttl, clock=clock)

    def test_fresh_hit_skips_fetch(self):
        clock = FakeClock()
        fetch = CountingFetch({"success": True, "data": [1]})
        reader = self._reader(fetch, clock)

        assert run(reader.get({"page": 1})) == {"success": True, "data": [1]}
        clock.advance(299)
        assert run(reader.get({"page": 1})) == {"success": True, "data": [1]}
        assert fetch.calls == 1

    def test_expired_entry_is_refetched(self):
        clock = FakeClock()
        fetch = CountingFetch({"data": "old"}, {"data": "new"})
        reader = self._reader(fetch, clock)

        run(reader.get({"page": 1}))
        clock.advance(300)
        assert run(reader.get({"page": 1})) == {"data": "new"}
        assert fetch.calls == 2

    def test_stale_entry_served_on_rate_limit(self):
        clock = FakeClock()
        fetch = CountingFetch({"data": "old"}, error_result(429, "Too many requests"))
        reader = self._reader(fetch, clock)

        run(reader.get({"page": 1}))
        clock.advance(600)
        assert run(reader.get({"page": 1})) == {"data": "old"}

    def test_other_errors_do_not_use_stale_entry(self):
        clock = FakeClock()
        fetch = CountingFetch({"data": "old"}, error_result(500, "boom"))
        reader = CachedReader(
            "cities",
            InMemoryTTLCache(clock=clock),
            fetch,
            ("page",),
            clock=clock,
            empty=lambda: {"success": False, "data": []},
        )

        run(reader.get({"page": 1}))
        clock.advance(600)
        result = run(reader.get({"page": 1}))
        assert result == {"success": False, "data": [], "error": {"status": 500, "message": "boom"}}

    def test_rate_limit_without_entry_returns_empty(self):
        clock = FakeClock()
        reader = self._reader(CountingFetch(error_result(429, "slow down")), clock)
        result = run(reader.get({"page": 1}))
        assert result["data"] is None
        assert result["error"]["status"] == 429

    def test_errors_are_not_stored(self):
        clock = FakeClock()
        fetch = CountingFetch(error_result(503, "down"), {"data": "ok"})
        reader = self._reader(fetch, clock)

        run(reader.get({"page": 1}))
        assert run(reader.get({"page": 1})) == {"data": "ok"}
        assert fetch.calls == 2


class TestInMemoryTTLCache:
    def test_lru_bound(self):
        cache = InMemoryTTLCache(max_entries=2, clock=FakeClock())
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)

        assert len(cache) == 2
        assert cache.get("b") is None
        assert cache.get("a").data == 1

    def test_sweep_drops_entries_past_stale_horizon(self):
        clock = FakeClock()
        cache = InMemoryTTLCache(stale_seconds=100, clock=clock)
        cache.set("old", 1)
        clock.advance(101)
        cache.set("new", 2)

        assert cache.get("old") is None
        assert cache.get("new").data == 2


class TestRedisTTLCache:
    def test_stores_json_with_stale_expiry(self):
        client = MagicMock()
        cache = RedisTTLCache(client, stale_seconds=3600, clock=FakeClock(50.0))
        cache.set("cities|1", {"data": [1]})

        key, ttl, raw = client.setex.call_args[0]
        assert key == "ttl_cache:cities|1"
        assert ttl == 3600
        assert json.loads(raw) == {"data": {"data": [1]}, "timestamp": 50.0}

    def test_reads_entry(self):
        client = MagicMock()
        client.get.return_value = json.dumps({"data": [1], "timestamp": 10}).encode()
        entry = RedisTTLCache(client).get("k")
        assert entry.data == [1]
        assert entry.timestamp == 10.0

    def test_redis_failures_are_misses(self):
        client = MagicMock()
        client.get.side_effect = redis.ConnectionError("down")
        client.setex.side_effect = redis.ConnectionError("down")
        cache = RedisTTLCache(client)

        assert cache.get("k") is None
        cache.set("k", {"a": 1})

    def test_unreachable_redis_falls_back_to_memory(self, monkeypatch):
        client = MagicMock()
        client.ping.side_effect = redis.ConnectionError("refused")
        monkeypatch.setattr(redis, "from_url", lambda *args, **kwargs: client)
        settings = Settings(SESSION_SECRET="s", REDIS_URL="redis://nowhere:6379/0")

        assert isinstance(build_cache_backend(settings), InMemoryTTLCache)


class TestReferenceReaders:
    def test_cities_cached_per_key(self, backend: FakeBackend, factory: RestClientFactory):
        readers = ReferenceReaders(factory, InMemoryTTLCache())

        run(readers.get_cities(country_id="c-mx", is_active=True))
        run(readers.get_cities(country_id="c-mx", is_active=True))
        run(readers.get_cities(country_id="c-us", is_active=True))

        assert len(backend.calls_to("cities")) == 2

    def test_price_range_key_includes_currency(self, backend: FakeBackend, factory: RestClientFactory):
        backend.add("GET", "tours/price-range", {"success": True, "data": {"min": 1, "max": 5}})
        readers = ReferenceReaders(factory, InMemoryTTLCache())

        run(readers.get_price_range({"country": "MX"}, "es", "MXN"))
        run(readers.get_price_range({"country": "MX", "ignored": "x"}, "es", "MXN"))
        run(readers.get_price_range({"country": "MX"}, "es", "USD"))

        calls = backend.calls_to("tours/price-range")
        assert len(calls) == 2
        assert calls[-1].headers["X-Currency"] == "USD"
        assert dict(calls[-1].url.params) == {"country": "MX"}

    def test_price_range_queries_with_separators_are_fetched_separately(
        self, backend: FakeBackend, factory: RestClientFactory
    ):
        backend.add(
            "GET",
            "tours/price-range",
            responder=lambda request: httpx.Response(200, json={"success": True, "data": dict(request.url.params)}),
        )
        readers = ReferenceReaders(factory, InMemoryTTLCache())

        first = run(readers.get_price_range({"country": "A|B", "category": "C"}))
        second = run(readers.get_price_range({"country": "A", "city": "B|", "category": "C"}))

        assert len(backend.calls_to("tours/price-range")) == 2
        assert first["data"] == {"country": "A|B", "category": "C"}
        assert second["data"] == {"country": "A", "city": "B|", "category": "C"}
