"""Tests for the expiring store backends."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError, TimeoutError as RedisTimeoutError

from otp_service.exceptions import StoreError
from otp_service.stores.memory_store import InMemoryOTPStore
from otp_service.stores.redis_store import RedisOTPStore


# ── In-memory store ──────────────────────────────────────

class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.mark.asyncio
async def test_memory_set_get_delete():
    store = InMemoryOTPStore()
    await store.set("otp:a", "123456", 60)
    assert await store.get("otp:a") == "123456"

    await store.delete("otp:a")
    assert await store.get("otp:a") is None
    # Deleting a missing key is fine
    await store.delete("otp:a")


@pytest.mark.asyncio
async def test_memory_overwrite_resets_ttl():
    clock = FakeClock()
    store = InMemoryOTPStore(clock=clock)
    await store.set("k", "old", 10)
    clock.now = 8
    await store.set("k", "new", 10)
    clock.now = 15
    assert await store.get("k") == "new"


@pytest.mark.asyncio
async def test_memory_expiry_purges_entry():
    clock = FakeClock()
    store = InMemoryOTPStore(clock=clock)
    await store.set("k", "v", 10)
    clock.now = 10
    assert await store.get("k") is None
    assert len(store) == 0


# ── Redis store ──────────────────────────────────────────

@pytest.fixture
def client():
    return AsyncMock()


@pytest.mark.asyncio
async def test_redis_set_uses_server_side_expiry(client):
    store = RedisOTPStore(client)
    await store.set("otp:u1", "123456", 300)
    client.set.assert_awaited_once_with("otp:u1", "123456", ex=300)


@pytest.mark.asyncio
async def test_redis_get_missing_returns_none(client):
    client.get.return_value = None
    store = RedisOTPStore(client)
    assert await store.get("otp:u1") is None


@pytest.mark.asyncio
async def test_redis_get_returns_value(client):
    client.get.return_value = "123456"
    store = RedisOTPStore(client)
    assert await store.get("otp:u1") == "123456"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [RedisConnectionError("refused"), RedisTimeoutError("slow"), ResponseError("WRONGTYPE")],
)
async def test_redis_errors_become_store_errors(client, error):
    client.set.side_effect = error
    client.get.side_effect = error
    client.delete.side_effect = error
    client.ping.side_effect = error
    store = RedisOTPStore(client)

    with pytest.raises(StoreError):
        await store.set("k", "v", 1)
    with pytest.raises(StoreError):
        await store.get("k")
    with pytest.raises(StoreError):
        await store.delete("k")
    with pytest.raises(StoreError):
        await store.ping()


@pytest.mark.asyncio
async def test_redis_close_closes_client(client):
    store = RedisOTPStore(client)
    await store.close()
    client.aclose.assert_awaited_once()


def test_redis_from_addr_builds_client():
    store = RedisOTPStore.from_addr("cache.local:6380", password="s3cret", db=2)
    kwargs = store._client.connection_pool.connection_kwargs
    assert kwargs["host"] == "cache.local"
    assert kwargs["port"] == 6380
    assert kwargs["password"] == "s3cret"
    assert kwargs["db"] == 2
    assert kwargs["decode_responses"] is True


def test_redis_from_addr_defaults_port():
    store = RedisOTPStore.from_addr("cache.local")
    kwargs = store._client.connection_pool.connection_kwargs
    assert kwargs["host"] == "cache.local"
    assert kwargs["port"] == 6379


@pytest.mark.asyncio
async def test_memory_set_evicts_expired_keys_of_other_users():
    clock = FakeClock()
    store = InMemoryOTPStore(clock=clock)
    for i in range(1000):
        await store.set(f"otp:user{i}", "123456", 300)

    clock.now = 10_000
    await store.set("otp:latest", "654321", 300)

    assert len(store) == 1
    assert await store.get("otp:latest") == "654321"


@pytest.mark.asyncio
async def test_memory_eviction_keeps_overwritten_live_key():
    clock = FakeClock()
    store = InMemoryOTPStore(clock=clock)
    await store.set("k", "old", 10)
    clock.now = 8
    await store.set("k", "new", 10)
    clock.now = 12
    # Deadline of the old write has passed, the new one has not
    await store.set("other", "v", 10)

    assert await store.get("k") == "new"
    assert len(store) == 2


@pytest.mark.parametrize(
    "addr,host,port",
    [
        ("[::1]:6379", "::1", 6379),
        ("[::1]", "::1", 6379),
        ("::1", "::1", 6379),
        (":6380", "localhost", 6380),
    ],
)
def test_redis_from_addr_ipv6_and_empty_host(addr, host, port):
    kwargs = RedisOTPStore.from_addr(addr)._client.connection_pool.connection_kwargs
    assert kwargs["host"] == host
    assert kwargs["port"] == port
