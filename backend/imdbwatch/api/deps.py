from typing import Annotated

from fastapi import Depends
from fastapi.requests import HTTPConnection

from imdbwatch.scraping.imdb_watchlist import WatchlistResolver
from imdbwatch.services.movies import MovieEnrichmentResolver


def get_watchlist_resolver(connection: HTTPConnection) -> WatchlistResolver:
    return connection.app.state.resolvers.watchlist


def get_enrichment_resolver(connection: HTTPConnection) -> MovieEnrichmentResolver:
    return connection.app.state.resolvers.enrichment


WatchlistResolverDep = Annotated[WatchlistResolver, Depends(get_watchlist_resolver)]
EnrichmentResolverDep = Annotated[
    MovieEnrichmentResolver, Depends(get_enrichment_resolver)
]
