from typing import Any
from urllib.parse import urlencode

from imdbwatch.converters import movie as movie_converters
from imdbwatch.exceptions.scraper_exceptions import UpstreamHttpError
from imdbwatch.models.movie import BechdelRating

from . import logger
from .fetch import CachedFetcher
from .imdb_config import BECHDEL_API_URL, BECHDEL_CACHE_TTL_SECONDS, BECHDEL_HEADERS


def bechdel_url(imdb_id: str, api_url: str = BECHDEL_API_URL) -> str:
    # The API wants the numeric part of the IMDb id only.
    return f"{api_url}?{urlencode({'imdbid': imdb_id.removeprefix('tt')})}"


async def fetch_bechdel(
    fetcher: CachedFetcher,
    imdb_id: str,
    *,
    api_url: str = BECHDEL_API_URL,
    ttl_seconds: int = BECHDEL_CACHE_TTL_SECONDS,
) -> BechdelRating | None:
    """Look up the Bechdel Test rating of a title, or None when the API does not know it."""
    url = bechdel_url(imdb_id, api_url)
    payload: Any = await fetcher.fetch_cached(
        url,
        headers=BECHDEL_HEADERS,
        ttl_seconds=ttl_seconds,
    )
    if not isinstance(payload, dict):
        raise UpstreamHttpError(url=url, reason="Bechdel response is not an object")
    if payload.get("status") is not None:
        logger.debug(f"No Bechdel rating for {imdb_id}: status {payload['status']}")
        return None
    return movie_converters.to_bechdel_rating(payload)
