from enum import Enum, unique


@unique
class CacheMode(str, Enum):
    READ_WRITE = "read_write"
    WRITE_ONLY = "write_only"


@unique
class StreamMessageType(str, Enum):
    WATCHLIST = "watchlist"
    MOVIE = "movie"
    ERROR = "error"
