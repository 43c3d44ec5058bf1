import asyncio

import pytest
from pytest_mock import MockerFixture

from imdbwatch.cache import store as store_module
from imdbwatch.cache.store import (
    InMemoryKeyValueStore,
    RedisKeyValueStore,
    create_store,
)


def test_in_memory_store_returns_value_until_expiry(store: InMemoryKeyValueStore, clock):
    asyncio.run(store.set_with_expiry("request:a", '{"a":1}', 60))

    clock.advance(59)
    assert asyncio.run(store.get("request:a")) == '{"a":1}'

    clock.advance(1)
    assert asyncio.run(store.get("request:a")) is None
    assert len(store) == 0


def test_in_memory_store_overwrite_resets_expiry(store: InMemoryKeyValueStore, clock):
    asyncio.run(store.set_with_expiry("key", "first", 10))
    clock.advance(8)
    asyncio.run(store.set_with_expiry("key", "second", 10))
    clock.advance(8)

    assert asyncio.run(store.get("key")) == "second"


def test_in_memory_store_sweeps_expired_entries_on_write(
    store: InMemoryKeyValueStore, clock
):
    for i in range(1000):
        asyncio.run(store.set_with_expiry(f"request:{i}", "value", 1))

    clock.advance(10_000)
    asyncio.run(store.set_with_expiry("request:fresh", "value", 60))

    assert len(store) == 1
    assert asyncio.run(store.get("request:fresh")) == "value"


def test_in_memory_store_sweeps_at_most_once_per_interval(clock):
    store = InMemoryKeyValueStore(clock=clock, sweep_interval_seconds=60)
    asyncio.run(store.set_with_expiry("short", "value", 1))

    clock.advance(30)
    asyncio.run(store.set_with_expiry("other", "value", 600))
    assert len(store) == 2

    clock.advance(30)
    asyncio.run(store.set_with_expiry("another", "value", 600))
    assert len(store) == 2
    assert asyncio.run(store.get("short")) is None


def test_in_memory_store_missing_key(store: InMemoryKeyValueStore):
    assert asyncio.run(store.get("nothing-here")) is None


@pytest.mark.parametrize("ttl", [0, -5])
def test_store_rejects_non_positive_ttl(store: InMemoryKeyValueStore, ttl: int):
    with pytest.raises(ValueError):
        asyncio.run(store.set_with_expiry("key", "value", ttl))


def test_redis_store_uses_setex(mocker: MockerFixture):
    client = mocker.MagicMock()
    client.get = mocker.AsyncMock(return_value='{"rating":"3"}')
    client.setex = mocker.AsyncMock()
    client.aclose = mocker.AsyncMock()
    from_url = mocker.patch.object(store_module.redis, "from_url", return_value=client)

    redis_store = RedisKeyValueStore(redis_url="redis://localhost:6379/0")
    asyncio.run(redis_store.set_with_expiry("request:x", '{"rating":"3"}', 3600))
    value = asyncio.run(redis_store.get("request:x"))
    asyncio.run(redis_store.close())

    from_url.assert_called_once_with("redis://localhost:6379/0", decode_responses=True)
    client.setex.assert_awaited_once_with("request:x", 3600, '{"rating":"3"}')
    client.get.assert_awaited_once_with("request:x")
    client.aclose.assert_awaited_once()
    assert value == '{"rating":"3"}'


def test_create_store_picks_implementation(mocker: MockerFixture):
    mocker.patch.object(store_module.redis, "from_url", return_value=mocker.MagicMock())

    assert isinstance(create_store("redis://cache:6379"), RedisKeyValueStore)
    assert isinstance(create_store(None), InMemoryKeyValueStore)
    assert isinstance(create_store(""), InMemoryKeyValueStore)
