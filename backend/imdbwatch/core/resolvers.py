from dataclasses import dataclass

from aiohttp import ClientSession

from imdbwatch.cache.resolver import CachedResolver
from imdbwatch.cache.store import KeyValueStore
from imdbwatch.core.config import Settings
from imdbwatch.core.enums import CacheMode
from imdbwatch.scraping.fetch import CachedFetcher
from imdbwatch.scraping.imdb_watchlist import WatchlistResolver
from imdbwatch.services.movies import MovieEnrichmentResolver


@dataclass
class Resolvers:
    watchlist: WatchlistResolver
    enrichment: MovieEnrichmentResolver


def create_resolvers(
    *,
    session: ClientSession,
    store: KeyValueStore,
    config: Settings,
    cache_mode: CacheMode | None = None,
) -> Resolvers:
    """Wire the resolvers around one shared HTTP session and cache store."""
    cached_resolver = CachedResolver(
        store=store,
        mode=cache_mode or config.cache_mode,
    )
    fetcher = CachedFetcher(session=session, resolver=cached_resolver)
    return Resolvers(
        watchlist=WatchlistResolver(
            session=session,
            fetcher=fetcher,
            base_url=config.IMDB_BASE_URL,
            metadata_ttl_seconds=config.IMDB_METADATA_CACHE_TTL_SECONDS,
        ),
        enrichment=MovieEnrichmentResolver(
            fetcher=fetcher,
            bechdel_api_url=config.BECHDEL_API_URL,
            bechdel_ttl_seconds=config.BECHDEL_CACHE_TTL_SECONDS,
        ),
    )
