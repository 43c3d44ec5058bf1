import pytest

from imdbwatch.cache.resolver import CachedResolver
from imdbwatch.cache.store import InMemoryKeyValueStore
from imdbwatch.core.enums import CacheMode
from imdbwatch.scraping.fetch import CachedFetcher

from .fixtures.factories import *
from .fixtures.http import *
from .fixtures.imdb import *


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore(clock=clock)


@pytest.fixture
def cached_resolver(store: InMemoryKeyValueStore) -> CachedResolver:
    return CachedResolver(store=store, mode=CacheMode.READ_WRITE)


@pytest.fixture
def fetcher(fake_session: FakeSession, cached_resolver: CachedResolver) -> CachedFetcher:
    return CachedFetcher(session=fake_session, resolver=cached_resolver)  # type: ignore[arg-type]
