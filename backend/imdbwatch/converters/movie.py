from datetime import datetime, timezone
from typing import Any

from imdbwatch.models.movie import BechdelRating, Movie, Ratings
from imdbwatch.scraping.imdb_config import IMDB_BASE_URL


def calculate_run_time(metadata: dict[str, Any]) -> float | None:
    """Total run time in minutes; series multiply the episode runtime by the episode count."""
    run_time_seconds = metadata.get("runtime")
    if not run_time_seconds:
        return None
    number_of_episodes = metadata.get("numberOfEpisodes") or 1
    return run_time_seconds / 60 * number_of_episodes


def to_release_date(release: Any) -> str | None:
    if release is None or release == "":
        return None
    if isinstance(release, bool):
        return None
    if isinstance(release, int | float):
        # Epoch milliseconds
        released_at = datetime.fromtimestamp(release / 1000, tz=timezone.utc)
        return released_at.date().isoformat()
    return str(release)


def to_imdb_rating(rating: Any) -> float | None:
    if rating is None:
        return None
    return float(rating) * 10


def to_movie(
    raw: dict[str, Any],
    *,
    title_id: str | None = None,
    base_url: str = IMDB_BASE_URL,
) -> Movie:
    """
    Convert an IMDb title metadata record into a Movie.

    Parameters:
        raw (dict): The `title` record of the batched metadata endpoint.
        title_id (str): Key of the record in the batched mapping, used when
            the record carries no `id` of its own.
        base_url (str): Host prepended to the relative title href.
    Returns:
        Movie: The normalized movie, with empty ratings and viewing options
        where the record has no data.
    Raises:
        KeyError: If the record has no `primary` block or no id at all.
    """
    movie_id = raw.get("id") or title_id
    if not movie_id:
        raise KeyError("id")
    primary = raw["primary"]
    metadata = raw.get("metadata") or {}
    ratings = raw.get("ratings") or {}

    return Movie(
        id=movie_id,
        title=primary["title"],
        imdb_url=f"{base_url}{primary['href']}",
        type=raw.get("type") or "",
        release_date=to_release_date(metadata.get("release")),
        run_time=calculate_run_time(metadata),
        genres=list(metadata.get("genres") or []),
        ratings=Ratings(
            metascore=ratings.get("metascore"),
            imdb=to_imdb_rating(ratings.get("rating")),
        ),
    )


def to_bechdel_rating(payload: dict[str, Any]) -> BechdelRating:
    return BechdelRating(
        rating=int(payload["rating"]),
        dubious=payload.get("dubious") == "1",
    )


def with_bechdel_rating(movie: Movie, bechdel_rating: BechdelRating | None) -> Movie:
    """Return a copy of the movie whose Bechdel rating is replaced, other ratings untouched."""
    ratings = movie.ratings.model_copy(update={"bechdel": bechdel_rating})
    return movie.model_copy(update={"ratings": ratings})
