import json
from time import perf_counter
from typing import Any
from urllib.parse import quote

from aiohttp import ClientSession

from imdbwatch.converters import movie as movie_converters
from imdbwatch.exceptions.scraper_exceptions import WatchlistParseError
from imdbwatch.models.movie import Movie
from imdbwatch.models.watchlist import Watchlist

from . import logger
from .fetch import CachedFetcher, request_text
from .imdb_config import (
    IMDB_BASE_URL,
    IMDB_METADATA_CACHE_TTL_SECONDS,
    INITIAL_STATE_PATTERN,
    TITLE_DATA_HEADERS,
    TITLE_DATA_URL_TEMPLATE,
    WATCHLIST_URL_TEMPLATE,
)


def extract_initial_state(page: str) -> dict[str, Any]:
    """
    Extract the JSON blob the watchlist page hands to its React bundle via
    `IMDbReactInitialState.push({...});`.
    """
    match = INITIAL_STATE_PATTERN.search(page)
    if match is None:
        logger.error("IMDbReactInitialState marker not found in watchlist page.")
        raise WatchlistParseError("initial state marker not found")
    try:
        state = json.loads(match.group(1))
    except ValueError as e:
        logger.error(f"Initial state of watchlist page is not valid JSON: {e}")
        raise WatchlistParseError("initial state is not valid JSON") from e
    if not isinstance(state, dict):
        raise WatchlistParseError("initial state is not an object")
    return state


def extract_title_ids(state: dict[str, Any]) -> list[str]:
    try:
        items = state["list"]["items"]
        return [str(item["const"]) for item in items]
    except (KeyError, TypeError) as e:
        logger.error(f"Unexpected watchlist structure: {e!r}")
        raise WatchlistParseError("watchlist items not found") from e


class WatchlistResolver:
    """Resolves a user's IMDb watchlist into normalized movies."""

    def __init__(
        self,
        *,
        session: ClientSession,
        fetcher: CachedFetcher,
        base_url: str = IMDB_BASE_URL,
        metadata_ttl_seconds: int = IMDB_METADATA_CACHE_TTL_SECONDS,
    ) -> None:
        self.session = session
        self.fetcher = fetcher
        self.base_url = base_url
        self.metadata_ttl_seconds = metadata_ttl_seconds

    def watchlist_url(self, user_id: str) -> str:
        return WATCHLIST_URL_TEMPLATE.format(
            base_url=self.base_url, user_id=quote(user_id, safe="")
        )

    async def fetch_title_data(self, title_ids: list[str]) -> dict[str, Any]:
        """Fetch metadata of all titles in a single round trip."""
        url = TITLE_DATA_URL_TEMPLATE.format(
            base_url=self.base_url, ids=",".join(title_ids)
        )
        title_data = await self.fetcher.fetch_cached(
            url,
            headers=TITLE_DATA_HEADERS,
            ttl_seconds=self.metadata_ttl_seconds,
        )
        if not isinstance(title_data, dict):
            raise WatchlistParseError("title metadata is not an object")
        return title_data

    def to_movies(self, title_ids: list[str], title_data: dict[str, Any]) -> list[Movie]:
        movies: list[Movie] = []
        for title_id in title_ids:
            try:
                raw = title_data[title_id]["title"]
                movies.append(
                    movie_converters.to_movie(
                        raw, title_id=title_id, base_url=self.base_url
                    )
                )
            except (KeyError, TypeError) as e:
                logger.error(f"Metadata for title {title_id} has an unexpected shape: {e!r}")
                raise WatchlistParseError(f"no usable metadata for {title_id}") from e
        return movies

    async def fetch_watchlist(self, user_id: str) -> Watchlist:
        start = perf_counter()
        page = await request_text(session=self.session, url=self.watchlist_url(user_id))

        state = extract_initial_state(page)
        title_ids = extract_title_ids(state)
        list_data = state["list"]
        if "id" not in list_data or "name" not in list_data:
            raise WatchlistParseError("watchlist id or name not found")

        movies: list[Movie] = []
        if title_ids:
            title_data = await self.fetch_title_data(title_ids)
            movies = self.to_movies(title_ids, title_data)

        end = perf_counter()
        logger.info(
            f"Fetched {len(movies)} watchlist titles for user {user_id} in {end - start:.2f} seconds."
        )
        return Watchlist(
            id=str(list_data["id"]),
            name=str(list_data["name"]),
            movies=movies,
        )
