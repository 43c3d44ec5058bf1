"""Key-value stores backing the response cache.

Entries are plain strings with a time-to-live set at write time; expiry is
owned by the store, the cache layer never deletes anything itself.
"""

import time
from collections.abc import Callable
from logging import getLogger
from typing import Protocol

import redis.asyncio as redis

__all__ = [
    "KeyValueStore",
    "RedisKeyValueStore",
    "InMemoryKeyValueStore",
    "create_store",
]

logger = getLogger(__name__)


def _check_ttl(ttl_seconds: int) -> None:
    if ttl_seconds <= 0:
        raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")


class KeyValueStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> None: ...

    async def close(self) -> None: ...


class RedisKeyValueStore:
    """Redis-backed store, one client shared by the whole process."""

    def __init__(self, *, redis_url: str) -> None:
        self._client = redis.from_url(
            redis_url,
            decode_responses=True,  # return str, not bytes
        )

    async def get(self, key: str) -> str | None:
        return await self._client.get(key)

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> None:
        _check_ttl(ttl_seconds)
        await self._client.setex(key, ttl_seconds, value)

    async def close(self) -> None:
        await self._client.aclose()


class InMemoryKeyValueStore:
    """Process-local store with the same expiry semantics as Redis."""

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval_seconds: float = 60,
    ) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}
        self._sweep_interval_seconds = sweep_interval_seconds
        self._last_sweep = clock()

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> None:
        _check_ttl(ttl_seconds)
        now = self._clock()
        if now - self._last_sweep >= self._sweep_interval_seconds:
            self._sweep(now)
        self._entries[key] = (value, now + ttl_seconds)

    def _sweep(self, now: float) -> None:
        """Drop every expired entry, not just the ones read back."""
        expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        self._last_sweep = now
        if expired:
            logger.debug(f"Swept {len(expired)} expired cache entries")

    async def close(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def create_store(redis_url: str | None) -> KeyValueStore:
    if redis_url:
        logger.info("Using Redis cache store")
        return RedisKeyValueStore(redis_url=redis_url)
    logger.warning("REDIS_URL is not set; using an in-memory cache store")
    return InMemoryKeyValueStore()
