import factory  # type: ignore
import pytest

from imdbwatch.models.movie import Movie, Ratings

__all__ = [
    "MovieFactory",
    "movie_factory",
]


class RatingsFactory(factory.Factory):  # type: ignore
    class Meta:  # type: ignore
        model = Ratings

    metascore = factory.Faker("pyint", min_value=1, max_value=100)  # type: ignore
    imdb = factory.Faker("pyint", min_value=10, max_value=100)  # type: ignore
    rotten_tomatoes_meter = None
    bechdel = None


class MovieFactory(factory.Factory):  # type: ignore
    class Meta:  # type: ignore
        model = Movie

    id = factory.Sequence(lambda n: f"tt{n:07d}")  # type: ignore
    title = factory.Faker("sentence", nb_words=3)  # type: ignore
    imdb_url = factory.LazyAttribute(lambda o: f"http://www.imdb.com/title/{o.id}/")  # type: ignore
    type = "featureFilm"
    release_date = factory.Faker("date")  # type: ignore
    run_time = factory.Faker("pyint", min_value=60, max_value=200)  # type: ignore
    genres = factory.LazyFunction(lambda: ["Drama"])  # type: ignore
    ratings = factory.SubFactory(RatingsFactory)  # type: ignore


@pytest.fixture
def movie_factory() -> type[MovieFactory]:
    return MovieFactory
