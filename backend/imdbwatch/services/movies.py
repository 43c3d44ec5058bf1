import asyncio
from collections.abc import Awaitable
from logging import getLogger
from typing import TypeVar

from imdbwatch.converters import movie as movie_converters
from imdbwatch.models.movie import BechdelRating, Movie
from imdbwatch.scraping.bechdel import fetch_bechdel
from imdbwatch.scraping.fetch import CachedFetcher
from imdbwatch.scraping.imdb_config import BECHDEL_API_URL, BECHDEL_CACHE_TTL_SECONDS

logger = getLogger(__name__)

T = TypeVar("T")


async def best_effort(name: str, movie_id: str, task: Awaitable[T]) -> T | None:
    """Await an enrichment task, downgrading any failure to None."""
    try:
        return await task
    except Exception as e:
        logger.warning(f"{name} enrichment failed for {movie_id}: {e}")
        return None


class MovieEnrichmentResolver:
    """Adds supplementary ratings to a movie; every lookup is best-effort."""

    def __init__(
        self,
        *,
        fetcher: CachedFetcher,
        bechdel_api_url: str = BECHDEL_API_URL,
        bechdel_ttl_seconds: int = BECHDEL_CACHE_TTL_SECONDS,
    ) -> None:
        self.fetcher = fetcher
        self.bechdel_api_url = bechdel_api_url
        self.bechdel_ttl_seconds = bechdel_ttl_seconds

    async def fetch_bechdel(self, imdb_id: str) -> BechdelRating | None:
        return await fetch_bechdel(
            self.fetcher,
            imdb_id,
            api_url=self.bechdel_api_url,
            ttl_seconds=self.bechdel_ttl_seconds,
        )

    async def enrich(self, movie: Movie) -> Movie:
        # All lookups are dispatched before any is awaited.
        (bechdel_rating,) = await asyncio.gather(
            best_effort("Bechdel", movie.id, self.fetch_bechdel(movie.id)),
        )
        return movie_converters.with_bechdel_rating(movie, bechdel_rating)

    async def enrich_all(self, movies: list[Movie]) -> list[Movie]:
        return list(await asyncio.gather(*(self.enrich(movie) for movie in movies)))
