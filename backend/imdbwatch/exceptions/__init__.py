from .base import AppError
from .scraper_exceptions import UpstreamHttpError, WatchlistParseError
from .stream_exceptions import InvalidStreamMessage

__all__ = [
    "AppError",
    "InvalidStreamMessage",
    "UpstreamHttpError",
    "WatchlistParseError",
]
