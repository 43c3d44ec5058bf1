from .stream import (
    ErrorReplyBody,
    MovieReplyBody,
    MovieRequestBody,
    StreamReply,
    StreamRequest,
    WatchlistReplyBody,
    WatchlistRequestBody,
)

__all__ = [
    "ErrorReplyBody",
    "MovieReplyBody",
    "MovieRequestBody",
    "StreamReply",
    "StreamRequest",
    "WatchlistReplyBody",
    "WatchlistRequestBody",
]
