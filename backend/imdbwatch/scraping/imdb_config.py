"""Upstream endpoints, request headers and cache lifetimes."""

import re

DAY_IN_SECONDS = 24 * 60 * 60

IMDB_BASE_URL: str = "http://www.imdb.com"
WATCHLIST_URL_TEMPLATE: str = "{base_url}/user/{user_id}/watchlist?view=detail"
TITLE_DATA_URL_TEMPLATE: str = "{base_url}/title/data?ids={ids}"
BECHDEL_API_URL: str = "http://bechdeltest.com/api/v1/getMovieByImdbId"

INITIAL_STATE_PATTERN = re.compile(r"IMDbReactInitialState\.push\((\{.+\})\);")

TITLE_DATA_HEADERS: dict[str, str] = {"Accept-Language": "en-US,en"}
BECHDEL_HEADERS: dict[str, str] = {
    "Accept": "application/json, text/plain, */*",
    "Content-Type": "application/json",
}

BECHDEL_CACHE_TTL_SECONDS: int = 30 * DAY_IN_SECONDS
IMDB_METADATA_CACHE_TTL_SECONDS: int = DAY_IN_SECONDS
