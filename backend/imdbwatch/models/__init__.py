from .movie import BechdelRating, Movie, Ratings, ViewingOption, ViewingOptions
from .watchlist import Watchlist

__all__ = [
    "BechdelRating",
    "Movie",
    "Ratings",
    "ViewingOption",
    "ViewingOptions",
    "Watchlist",
]
