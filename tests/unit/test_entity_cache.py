"""Unit tests for the Redis-backed EntityCache."""

import json
from datetime import date, timedelta

from src.us_common.cache import EntityCache
from src.us_common.enums import Role
from src.us_user.application.schemas import UserDto
from tests.fakes import DownRedis, FakeRedis


def _dto() -> UserDto:
    return UserDto(
        user_id=42,
        name="Ann",
        surname="Lee",
        birth_date=date(1990, 5, 1),
        email="ann.lee@example.com",
        password="$2b$12$hash",
        role=Role.ADMIN,
    )


def _cache(client) -> EntityCache[UserDto]:
    return EntityCache("userCache", UserDto, timedelta(minutes=15), client=client)


class TestKeys:
    def test_key_format(self) -> None:
        assert _cache(FakeRedis()).key(42) == "userCache::42"


class TestPutGet:
    async def test_put_then_get_returns_equal_value(self) -> None:
        redis = FakeRedis()
        cache = _cache(redis)

        await cache.put(42, _dto())
        cached = await cache.get(42)

        assert cached == _dto()
        assert redis.ttls["userCache::42"] == 900

    async def test_value_is_camel_case_json_with_write_only_fields(self) -> None:
        redis = FakeRedis()
        await _cache(redis).put(42, _dto())

        stored = json.loads(redis.data["userCache::42"])
        assert stored["userId"] == 42
        assert stored["birthDate"] == "1990-05-01"
        assert stored["password"] == "$2b$12$hash"
        assert stored["role"] == "ADMIN"

    async def test_none_is_never_cached(self) -> None:
        redis = FakeRedis()
        await _cache(redis).put(42, None)
        assert redis.data == {}

    async def test_miss_returns_none(self) -> None:
        assert await _cache(FakeRedis()).get(1) is None

    async def test_unreadable_entry_is_a_miss(self) -> None:
        redis = FakeRedis()
        redis.data["userCache::42"] = "{not json"
        assert await _cache(redis).get(42) is None


class TestEvict:
    async def test_evict_removes_entry(self) -> None:
        redis = FakeRedis()
        cache = _cache(redis)
        await cache.put(42, _dto())

        await cache.evict(42)

        assert await cache.get(42) is None

    async def test_evict_missing_is_noop(self) -> None:
        await _cache(FakeRedis()).evict(99)


class TestRedisDown:
    async def test_get_degrades_to_miss(self) -> None:
        assert await _cache(DownRedis()).get(42) is None

    async def test_put_and_evict_do_not_raise(self) -> None:
        cache = _cache(DownRedis())
        await cache.put(42, _dto())
        await cache.evict(42)
