from typing import Annotated, Any

from pydantic import BeforeValidator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from imdbwatch.core.enums import CacheMode

DAY_IN_SECONDS = 24 * 60 * 60


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "imdb-watchlist"
    API_V1_STR: str = "/api/v1"
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    BACKEND_CORS_ORIGINS: Annotated[list[str] | str, BeforeValidator(parse_cors)] = ["*"]

    REDIS_URL: str | None = None
    CACHE_MODE: CacheMode = CacheMode.READ_WRITE
    # Legacy switch, equivalent to CACHE_MODE=write_only.
    DISABLE_CACHE: bool = False

    IMDB_BASE_URL: str = "http://www.imdb.com"
    BECHDEL_API_URL: str = "http://bechdeltest.com/api/v1/getMovieByImdbId"
    BECHDEL_CACHE_TTL_SECONDS: int = 30 * DAY_IN_SECONDS
    IMDB_METADATA_CACHE_TTL_SECONDS: int = DAY_IN_SECONDS

    DEBUG: bool = False
    LOG_DIR: str = "logs"
    ENABLE_TELEGRAM: bool = False
    TELEGRAM_BOT_TOKEN: str | None = None
    TELEGRAM_USER_ID: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        if isinstance(self.BACKEND_CORS_ORIGINS, str):
            return [self.BACKEND_CORS_ORIGINS]
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cache_mode(self) -> CacheMode:
        if self.DISABLE_CACHE:
            return CacheMode.WRITE_ONLY
        return self.CACHE_MODE


settings = Settings()
