"""
Unit Tests for the daily cache
"""

from unittest.mock import MagicMock

import pytest
import redis

from phoenix.infrastructure.cache import DailyCache, RedisClient


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return DailyCache(ttl_seconds=60, clock=clock)


class TestDailyCache:
    def test_today_key(self):
        assert DailyCache.today_key("2026-10-18") == "today:2026-10-18"

    def test_hit_before_expiry(self, cache, clock):
        cache.set_today("2026-10-18", {"leagues": []})
        clock.now += 59

        assert cache.get_today("2026-10-18") == {"leagues": []}
        assert cache.hits == 1

    def test_expired_entry_is_a_miss(self, cache, clock):
        cache.set_today("2026-10-18", {"leagues": []})
        clock.now += 60

        assert cache.get_today("2026-10-18") is None
        assert cache.misses == 1
        assert cache.keys() == []

    def test_days_are_independent(self, cache):
        cache.set_today("2026-10-18", {"day": 1})

        assert cache.get_today("2026-10-19") is None

    def test_custom_ttl(self, cache, clock):
        cache.set("k", "v", ttl_seconds=5)
        clock.now += 6

        assert cache.get("k") is None

    def test_invalidate_and_clear(self, cache):
        cache.set("a", 1)
        cache.set("b", 2)

        assert cache.invalidate("a") is True
        assert cache.invalidate("a") is False
        cache.clear()
        assert cache.keys() == []


class TestRedisLayer:
    def test_redis_backfills_memory(self, clock):
        redis_client = MagicMock()
        redis_client.get.return_value = {"from": "redis"}
        cache = DailyCache(ttl_seconds=60, redis_client=redis_client, clock=clock)

        assert cache.get("today:2026-10-18") == {"from": "redis"}
        assert cache.get("today:2026-10-18") == {"from": "redis"}
        redis_client.get.assert_called_once_with("today:2026-10-18")

    def test_set_writes_through(self, clock):
        redis_client = MagicMock()
        cache = DailyCache(ttl_seconds=60, redis_client=redis_client, clock=clock)

        cache.set_today("2026-10-18", {"x": 1})

        redis_client.set.assert_called_once_with("today:2026-10-18", {"x": 1}, 60)

    def test_redis_connected(self, clock):
        redis_client = MagicMock(is_connected=False)

        assert DailyCache(redis_client=redis_client, clock=clock).redis_connected is False
        assert DailyCache(clock=clock).redis_connected is False


class TestRedisClient:
    @pytest.fixture
    def backend(self):
        return MagicMock()

    @pytest.fixture
    def client(self, backend):
        return RedisClient(host="redis.test", client=backend)

    def test_roundtrip_uses_prefix(self, client, backend):
        client.set("today:2026-10-18", {"leagues": []}, 60)

        backend.set.assert_called_once_with("phoenix:today:2026-10-18", '{"leagues": []}', ex=60)

        backend.get.return_value = '{"leagues": []}'
        assert client.get("today:2026-10-18") == {"leagues": []}
        backend.get.assert_called_with("phoenix:today:2026-10-18")

    def test_errors_are_misses(self, client, backend):
        backend.get.side_effect = redis.RedisError("boom")

        assert client.get("today:2026-10-18") is None

    def test_unreachable_server_disables_client(self, backend):
        backend.ping.side_effect = redis.ConnectionError("refused")

        client = RedisClient(host="redis.test", client=backend)

        assert client.is_connected is False
        assert client.set("k", 1, 60) is False


class TestDailyRollover:
    def test_past_days_are_evicted_on_write(self, cache, clock):
        for day in range(1, 31):
            cache.set_today(f"2026-10-{day:02d}", {"day": day})
            clock.now += 86400

        cache.set_today("2026-11-01", {"day": 32})

        assert list(cache._entries) == ["today:2026-11-01"]
        assert cache.keys() == ["today:2026-11-01"]

    def test_live_entries_survive_a_write(self, cache, clock):
        cache.set("a", 1)
        clock.now += 30
        cache.set("b", 2)

        assert sorted(cache._entries) == ["a", "b"]
