from typing import Any

from pydantic import BaseModel, Field

from imdbwatch.core.enums import StreamMessageType
from imdbwatch.models.movie import Movie, ValueModel
from imdbwatch.models.watchlist import Watchlist

__all__ = [
    "StreamRequest",
    "WatchlistRequestBody",
    "MovieRequestBody",
    "WatchlistReplyBody",
    "MovieReplyBody",
    "ErrorReplyBody",
    "StreamReply",
]


class StreamRequest(BaseModel):
    type: StreamMessageType
    body: dict[str, Any] = Field(default_factory=dict)


class WatchlistRequestBody(ValueModel):
    user_id: str = Field(min_length=1)


class MovieRequestBody(ValueModel):
    movie: Movie


class WatchlistReplyBody(ValueModel):
    user_id: str
    watchlist: Watchlist = Field(alias="list")


class MovieReplyBody(ValueModel):
    movie: Movie


class ErrorReplyBody(ValueModel):
    request_type: str | None = None
    detail: str


class StreamReply(ValueModel):
    type: StreamMessageType
    body: WatchlistReplyBody | MovieReplyBody | ErrorReplyBody

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
