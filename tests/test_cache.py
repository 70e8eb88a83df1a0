import fnmatch

from barbershop.cache import CLIENTS, RESERVATIONS, Cache


class FakeRedis:
    """In-process stand-in for the subset of redis.Redis the cache uses"""

    def __init__(self):
        self.store = {}
        self.ttls = {}

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value
        self.ttls[key] = ttl

    def keys(self, pattern):
        return [key for key in self.store if fnmatch.fnmatch(key, pattern)]

    def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
        return removed


class BrokenRedis:
    def get(self, key):
        raise ConnectionError("redis down")

    def setex(self, key, ttl, value):
        raise ConnectionError("redis down")

    def keys(self, pattern):
        raise ConnectionError("redis down")


def test_set_and_get_round_trip_json():
    fake = FakeRedis()
    cache = Cache(client=fake, enabled=True)

    assert cache.set(RESERVATIONS, "list:2025-03-18:*", [{"time": "9:00 AM"}], 30)

    assert cache.get(RESERVATIONS, "list:2025-03-18:*") == [{"time": "9:00 AM"}]
    assert fake.ttls["barbershop:reservations:list:2025-03-18:*"] == 30


def test_miss_returns_none():
    assert Cache(client=FakeRedis(), enabled=True).get(CLIENTS, "all") is None


def test_invalidate_only_clears_given_namespaces():
    cache = Cache(client=FakeRedis(), enabled=True)
    cache.set(RESERVATIONS, "a", 1, 30)
    cache.set(RESERVATIONS, "b", 2, 30)
    cache.set(CLIENTS, "all", [], 60)

    assert cache.invalidate(RESERVATIONS) == 2

    assert cache.get(RESERVATIONS, "a") is None
    assert cache.get(CLIENTS, "all") == []


def test_disabled_cache_is_a_no_op():
    fake = FakeRedis()
    cache = Cache(client=fake, enabled=False)

    assert not cache.set(CLIENTS, "all", [], 60)
    assert cache.get(CLIENTS, "all") is None
    assert cache.invalidate(CLIENTS) == 0
    assert fake.store == {}


def test_redis_errors_fail_open():
    cache = Cache(client=BrokenRedis(), enabled=True)

    assert cache.get(CLIENTS, "all") is None
    assert cache.set(CLIENTS, "all", [], 60) is False
    assert cache.invalidate(CLIENTS) == 0


def test_unreachable_redis_fails_open(monkeypatch):
    def refuse():
        raise ConnectionError("connection refused")

    monkeypatch.setattr("barbershop.cache.get_redis_client", refuse)
    cache = Cache(enabled=True)

    assert cache.get(CLIENTS, "all") is None
