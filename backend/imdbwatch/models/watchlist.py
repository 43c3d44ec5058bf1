from pydantic import Field

from .movie import Movie, ValueModel

__all__ = [
    "Watchlist",
]


class Watchlist(ValueModel):
    id: str
    name: str
    movies: list[Movie] = Field(default_factory=list)
