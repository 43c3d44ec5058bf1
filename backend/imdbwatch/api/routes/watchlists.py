from fastapi import APIRouter

from imdbwatch.api.deps import WatchlistResolverDep
from imdbwatch.models.watchlist import Watchlist

router = APIRouter(prefix="/watchlists", tags=["watchlists"])


@router.get("/{user_id}")
async def get_watchlist(
    user_id: str,
    watchlist_resolver: WatchlistResolverDep,
) -> Watchlist:
    return await watchlist_resolver.fetch_watchlist(user_id)
