from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from logging import getLogger

import aiohttp
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from imdbwatch.api.main import api_router
from imdbwatch.api.routes import stream
from imdbwatch.cache.store import create_store
from imdbwatch.core.config import settings
from imdbwatch.core.resolvers import create_resolvers
from imdbwatch.exceptions.handlers import register_exception_handlers
from imdbwatch.logging_ import setup_logger

logger = getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    setup_logger("server")
    store = create_store(settings.REDIS_URL)
    async with aiohttp.ClientSession() as session:
        app.state.resolvers = create_resolvers(
            session=session,
            store=store,
            config=settings,
        )
        logger.info(f"Cache mode: {settings.cache_mode.value}")
        try:
            yield
        finally:
            await store.close()


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)

if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)
app.include_router(api_router, prefix=settings.API_V1_STR)
app.include_router(stream.router)


def run() -> None:
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
