"""Warm the response cache for one or more IMDb watchlists.

Runs in write-only mode so every upstream response is fetched again and
rewritten, whatever the cache currently holds.
"""

import argparse
import asyncio
import sys

import aiohttp

from imdbwatch.cache.store import create_store
from imdbwatch.core.config import Settings, settings
from imdbwatch.core.enums import CacheMode
from imdbwatch.core.resolvers import Resolvers, create_resolvers
from imdbwatch.logging_ import setup_logger

from . import logger


async def warm_watchlist(resolvers: Resolvers, user_id: str) -> int:
    watchlist = await resolvers.watchlist.fetch_watchlist(user_id)
    movies = await resolvers.enrichment.enrich_all(watchlist.movies)
    rated = sum(1 for movie in movies if movie.ratings.bechdel is not None)
    logger.info(
        f"Warmed watchlist '{watchlist.name}' of {user_id}: {len(movies)} titles, {rated} with a Bechdel rating."
    )
    return len(movies)


async def warm_cache(user_ids: list[str], *, config: Settings = settings) -> list[str]:
    """Warm every watchlist; returns the user ids whose watchlist failed."""
    failed: list[str] = []
    store = create_store(config.REDIS_URL)
    try:
        async with aiohttp.ClientSession() as session:
            resolvers = create_resolvers(
                session=session,
                store=store,
                config=config,
                cache_mode=CacheMode.WRITE_ONLY,
            )
            for user_id in user_ids:
                try:
                    await warm_watchlist(resolvers, user_id)
                except Exception:
                    logger.error(f"Error warming watchlist of {user_id}", exc_info=True)
                    failed.append(user_id)
    finally:
        await store.close()
    return failed


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("user_ids", nargs="+", help="IMDb user ids, e.g. ur12345678")
    return parser.parse_args(argv)


def run(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logger("warm_cache")
    logger.info(f"Warming cache for {len(args.user_ids)} watchlist(s)...")
    failed = asyncio.run(warm_cache(args.user_ids))
    if failed:
        logger.error(f"Failed to warm {len(failed)} watchlist(s): {', '.join(failed)}")
        sys.exit(1)
    logger.info("Cache warming finished successfully.")


if __name__ == "__main__":
    run()
