import json
from collections.abc import Awaitable, Callable
from logging import getLogger
from typing import Any, TypeVar

from imdbwatch.core.enums import CacheMode

from .store import KeyValueStore

__all__ = [
    "CachedResolver",
    "dump_json",
]

logger = getLogger(__name__)

V = TypeVar("V")


def dump_json(value: Any) -> str:
    """Serialize a value into canonical JSON so equal values give equal bytes."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


class CachedResolver:
    """
    Cache-aside memoization of asynchronous producers.

    A fresh cached value is returned without calling the producer. On a miss
    (or always, in write-only mode) the producer runs once and a truthy result
    is written back under the key with the given TTL. Falsy results are
    returned as-is and never stored. Producer errors propagate unchanged.

    Concurrent misses on the same key are not deduplicated; every caller runs
    its own producer and the last write wins.
    """

    def __init__(
        self,
        *,
        store: KeyValueStore,
        mode: CacheMode = CacheMode.READ_WRITE,
    ) -> None:
        self.store = store
        self.mode = mode

    async def get_json(self, key: str) -> Any | None:
        if self.mode is CacheMode.WRITE_ONLY:
            return None
        raw = await self.store.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def save_json(self, key: str, value: Any, ttl_seconds: int) -> None:
        await self.store.set_with_expiry(key, dump_json(value), ttl_seconds)

    async def resolve(
        self,
        key: str,
        produce: Callable[[], Awaitable[V]],
        ttl_seconds: int,
    ) -> V:
        cached = await self.get_json(key)
        if cached:
            logger.debug(f"{key}: serving from cache")
            return cached

        logger.debug(f"{key}: resolving...")
        value = await produce()
        if value:
            await self.save_json(key, value, ttl_seconds)
        return value
