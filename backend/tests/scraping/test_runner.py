import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from imdbwatch.cache.store import InMemoryKeyValueStore
from imdbwatch.core.config import Settings
from imdbwatch.core.enums import CacheMode
from imdbwatch.core.resolvers import Resolvers
from imdbwatch.exceptions import WatchlistParseError
from imdbwatch.models.watchlist import Watchlist
from imdbwatch.scraping import runner


def test_warm_cache_forces_write_only_and_collects_failures(
    monkeypatch: pytest.MonkeyPatch, store: InMemoryKeyValueStore, movie_factory
):
    movies = movie_factory.build_batch(2)
    watchlist_resolver = MagicMock()
    watchlist_resolver.fetch_watchlist = AsyncMock(
        side_effect=[
            Watchlist(id="ls1", name="Watchlist", movies=movies),
            WatchlistParseError("initial state marker not found"),
        ]
    )
    enrichment_resolver = MagicMock()
    enrichment_resolver.enrich_all = AsyncMock(return_value=movies)
    cache_modes: list[CacheMode | None] = []

    def fake_create_resolvers(*, session, store, config, cache_mode=None):
        cache_modes.append(cache_mode)
        return Resolvers(watchlist=watchlist_resolver, enrichment=enrichment_resolver)

    monkeypatch.setattr(runner, "create_store", lambda _redis_url: store)
    monkeypatch.setattr(runner, "create_resolvers", fake_create_resolvers)

    failed = asyncio.run(
        runner.warm_cache(["ur1", "ur2"], config=Settings(_env_file=None))
    )

    assert failed == ["ur2"]
    assert cache_modes == [CacheMode.WRITE_ONLY]
    enrichment_resolver.enrich_all.assert_awaited_once_with(movies)


def test_run_exits_with_error_when_a_watchlist_fails(monkeypatch: pytest.MonkeyPatch):
    async def fake_warm_cache(user_ids):
        return user_ids[-1:]

    monkeypatch.setattr(runner, "setup_logger", lambda _name: None)
    monkeypatch.setattr(runner, "warm_cache", fake_warm_cache)

    with pytest.raises(SystemExit) as exc_info:
        runner.run(["ur1", "ur2"])

    assert exc_info.value.code == 1


def test_run_succeeds(monkeypatch: pytest.MonkeyPatch):
    async def fake_warm_cache(user_ids):
        return []

    monkeypatch.setattr(runner, "setup_logger", lambda _name: None)
    monkeypatch.setattr(runner, "warm_cache", fake_warm_cache)

    runner.run(["ur1"])
