from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

__all__ = [
    "BechdelRating",
    "Movie",
    "Ratings",
    "ViewingOption",
    "ViewingOptions",
]


class ValueModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class BechdelRating(ValueModel):
    rating: int
    dubious: bool


class Ratings(ValueModel):
    metascore: float | None = None
    rotten_tomatoes_meter: float | None = None
    imdb: float | None = None
    bechdel: BechdelRating | None = None


class ViewingOption(ValueModel):
    provider: str
    url: str
    monetization_type: str
    presentation_type: str
    price: float | None = None


class ViewingOptions(ValueModel):
    netflix: ViewingOption | None = None
    hbo: ViewingOption | None = None
    itunes: ViewingOption | None = None
    amazon: ViewingOption | None = None


class Movie(ValueModel):
    id: str
    title: str
    imdb_url: str
    type: str
    release_date: str | None = None
    run_time: float | None = None
    genres: list[str] = Field(default_factory=list)
    ratings: Ratings = Field(default_factory=Ratings)
    viewing_options: ViewingOptions = Field(default_factory=ViewingOptions)
