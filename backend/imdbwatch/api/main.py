from fastapi import APIRouter

from imdbwatch.api.routes import movies, utils, watchlists

api_router = APIRouter()
api_router.include_router(utils.router)
api_router.include_router(watchlists.router)
api_router.include_router(movies.router)
