"""
Tests for ResponseCache.

This module tests:
- Hit/miss by exact URL
- TTL expiry with an injected clock
- Refusal to store failures
- Purging and invalidation
"""

import pytest


@pytest.fixture
def ok_response():
    from opendata_gateway.models.responses import ToolResponse

    return ToolResponse.ok("https://x/api?a=1", '{"a":1}', {"a": 1})


class TestResponseCache:
    """Tests for ResponseCache get/set."""

    def test_miss_on_empty(self, cache) -> None:
        assert cache.get("https://x/api") is None

    def test_hit_returns_same_object(self, cache, ok_response) -> None:
        cache.set(ok_response.url, ok_response)

        assert cache.get(ok_response.url) is ok_response

    def test_key_includes_query_string(self, cache, ok_response) -> None:
        cache.set(ok_response.url, ok_response)

        assert cache.get("https://x/api?a=2") is None
        assert cache.get("https://x/api") is None

    def test_default_ttl_is_fifteen_minutes(self, cache) -> None:
        assert cache.default_ttl_seconds == 900

    def test_live_until_ttl(self, cache, clock, ok_response) -> None:
        cache.set(ok_response.url, ok_response, ttl_seconds=60)

        clock.advance(59)
        assert cache.get(ok_response.url) is ok_response

        clock.advance(1)
        assert cache.get(ok_response.url) is None
        assert len(cache) == 0

    def test_default_ttl_applies(self, cache, clock, ok_response) -> None:
        cache.set(ok_response.url, ok_response)

        clock.advance(899)
        assert cache.get(ok_response.url) is ok_response
        clock.advance(1)
        assert cache.get(ok_response.url) is None

    def test_refuses_failures(self, cache) -> None:
        from opendata_gateway.models.responses import ToolResponse
        from opendata_gateway.services.cache import CacheError

        failure = ToolResponse.failure("https://x", "boom", 500)

        with pytest.raises(CacheError):
            cache.set(failure.url, failure)
        assert len(cache) == 0

    def test_replace_entry(self, cache, ok_response) -> None:
        from opendata_gateway.models.responses import ToolResponse

        newer = ToolResponse.ok(ok_response.url, '{"a":2}', {"a": 2})
        cache.set(ok_response.url, ok_response)
        cache.set(ok_response.url, newer)

        assert cache.get(ok_response.url) is newer


class TestResponseCacheMaintenance:
    """Tests for purge_expired(), invalidate() and clear()."""

    def test_purge_expired(self, cache, clock) -> None:
        from opendata_gateway.models.responses import ToolResponse

        short = ToolResponse.ok("https://x/short", "s")
        long = ToolResponse.ok("https://x/long", "l")
        cache.set(short.url, short, ttl_seconds=10)
        cache.set(long.url, long, ttl_seconds=100)

        clock.advance(50)

        assert cache.purge_expired() == 1
        assert cache.get(long.url) is long

    def test_invalidate(self, cache, ok_response) -> None:
        cache.set(ok_response.url, ok_response)

        assert cache.invalidate(ok_response.url) is True
        assert cache.invalidate(ok_response.url) is False
        assert cache.get(ok_response.url) is None

    def test_clear(self, cache, ok_response) -> None:
        cache.set(ok_response.url, ok_response)
        cache.clear()

        assert len(cache) == 0

    def test_store_sweeps_expired_entries(self, cache, clock) -> None:
        from opendata_gateway.models.responses import ToolResponse

        for n in range(500):
            url = f"https://x/search?q={n}"
            cache.set(url, ToolResponse.ok(url, "{}", {}))

        clock.advance(3600)
        fresh = ToolResponse.ok("https://x/search?q=new", "{}", {})
        cache.set(fresh.url, fresh)

        assert len(cache) == 1
        assert cache.get(fresh.url) is fresh

    def test_sweep_keeps_live_entries(self, cache, clock) -> None:
        from opendata_gateway.models.responses import ToolResponse

        short = ToolResponse.ok("https://x/short", "s")
        long = ToolResponse.ok("https://x/long", "l")
        cache.set(short.url, short, ttl_seconds=10)
        cache.set(long.url, long, ttl_seconds=1000)

        clock.advance(120)
        cache.set("https://x/other", ToolResponse.ok("https://x/other", "o"))

        assert len(cache) == 2
        assert cache.get(long.url) is long

    def test_sweep_waits_for_interval(self, clock) -> None:
        from opendata_gateway.models.responses import ToolResponse
        from opendata_gateway.services.cache import ResponseCache

        cache = ResponseCache(clock=clock, purge_interval_seconds=60)
        cache.set("https://x/a", ToolResponse.ok("https://x/a", "a"), ttl_seconds=1)

        clock.advance(2)
        cache.set("https://x/b", ToolResponse.ok("https://x/b", "b"))
        assert len(cache) == 2

        clock.advance(58)
        cache.set("https://x/c", ToolResponse.ok("https://x/c", "c"))
        assert len(cache) == 2
