from fastapi import APIRouter

from imdbwatch.api.deps import EnrichmentResolverDep
from imdbwatch.models.movie import Movie

router = APIRouter(prefix="/movies", tags=["movies"])


@router.post("/enrich")
async def enrich_movie(
    movie: Movie,
    enrichment_resolver: EnrichmentResolverDep,
) -> Movie:
    """
    Add supplementary ratings to a movie. Lookups that fail leave their rating empty.
    """
    return await enrichment_resolver.enrich(movie)
