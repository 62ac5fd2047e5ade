"""Redis-backed expiring store."""

from __future__ import annotations

import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from otp_service.config import split_addr
from otp_service.exceptions import StoreError
from otp_service.stores.base import OTPStore

logger = logging.getLogger(__name__)


class RedisOTPStore(OTPStore):
    """Thin async wrapper translating Redis failures into ``StoreError``.

    The wrapped client is long-lived and shared by every request; it owns
    its own connection pool.  Expiry is enforced server-side via ``SET EX``.
    """

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    @classmethod
    def from_addr(
        cls,
        addr: str,
        password: str = "",
        db: int = 0,
        socket_timeout: float | None = None,
    ) -> RedisOTPStore:
        """Build a store from plain connection parameters."""
        host, port = split_addr(addr, default_port=6379, default_host="localhost")
        client = redis.Redis(
            host=host,
            port=port,
            password=password or None,
            db=db,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
            encoding="utf-8",
            decode_responses=True,
        )
        return cls(client)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self._client.set(key, value, ex=ttl_seconds)
        except RedisError as exc:
            raise StoreError(f"failed to set {key}") from exc

    async def get(self, key: str) -> str | None:
        try:
            return await self._client.get(key)
        except RedisError as exc:
            raise StoreError(f"failed to get {key}") from exc

    async def delete(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except RedisError as exc:
            raise StoreError(f"failed to delete {key}") from exc

    async def ping(self) -> None:
        try:
            await self._client.ping()
        except RedisError as exc:
            raise StoreError("redis ping failed") from exc

    async def close(self) -> None:
        await self._client.aclose()
