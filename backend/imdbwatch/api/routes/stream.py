import asyncio
from logging import getLogger
from typing import TypeVar

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, ValidationError

from imdbwatch.api.deps import EnrichmentResolverDep, WatchlistResolverDep
from imdbwatch.core.enums import StreamMessageType
from imdbwatch.exceptions import AppError, InvalidStreamMessage
from imdbwatch.schemas.stream import (
    ErrorReplyBody,
    MovieReplyBody,
    MovieRequestBody,
    StreamReply,
    StreamRequest,
    WatchlistReplyBody,
    WatchlistRequestBody,
)
from imdbwatch.scraping.imdb_watchlist import WatchlistResolver
from imdbwatch.services.movies import MovieEnrichmentResolver

router = APIRouter(tags=["stream"])
logger = getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def parse_request(raw: str) -> StreamRequest:
    try:
        return StreamRequest.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidStreamMessage(f"{e.error_count()} validation error(s)") from e


def parse_body(model: type[T], request: StreamRequest) -> T:
    try:
        return model.model_validate(request.body)
    except ValidationError as e:
        raise InvalidStreamMessage(
            f"bad {request.type.value} body, {e.error_count()} validation error(s)"
        ) from e


async def handle_request(
    request: StreamRequest,
    *,
    watchlist_resolver: WatchlistResolver,
    enrichment_resolver: MovieEnrichmentResolver,
) -> StreamReply:
    if request.type is StreamMessageType.WATCHLIST:
        watchlist_body = parse_body(WatchlistRequestBody, request)
        watchlist = await watchlist_resolver.fetch_watchlist(watchlist_body.user_id)
        return StreamReply(
            type=request.type,
            body=WatchlistReplyBody(user_id=watchlist_body.user_id, watchlist=watchlist),
        )
    if request.type is StreamMessageType.MOVIE:
        movie_body = parse_body(MovieRequestBody, request)
        movie = await enrichment_resolver.enrich(movie_body.movie)
        return StreamReply(type=request.type, body=MovieReplyBody(movie=movie))
    raise InvalidStreamMessage(f"unsupported message type '{request.type.value}'")


def error_reply(request_type: str | None, detail: str) -> StreamReply:
    return StreamReply(
        type=StreamMessageType.ERROR,
        body=ErrorReplyBody(request_type=request_type, detail=detail),
    )


@router.websocket("/stream")
async def stream(
    websocket: WebSocket,
    watchlist_resolver: WatchlistResolverDep,
    enrichment_resolver: EnrichmentResolverDep,
) -> None:
    await websocket.accept()
    logger.info("Connected")

    send_lock = asyncio.Lock()
    pending: set[asyncio.Task[None]] = set()

    async def handle(raw: str | None) -> None:
        request_type: str | None = None
        try:
            if raw is None:
                raise InvalidStreamMessage("binary frames are not supported")
            request = parse_request(raw)
            request_type = request.type.value
            reply = await handle_request(
                request,
                watchlist_resolver=watchlist_resolver,
                enrichment_resolver=enrichment_resolver,
            )
        except AppError as e:
            logger.warning(f"Stream {request_type or 'unknown'} request failed: {e.detail}")
            reply = error_reply(request_type, e.detail)
        except Exception:
            logger.exception(f"Unexpected error handling stream {request_type or 'unknown'} request")
            reply = error_reply(request_type, "An unexpected error occurred.")

        async with send_lock:
            try:
                await websocket.send_json(reply.to_wire())
            except (WebSocketDisconnect, RuntimeError):
                logger.debug(f"Client went away before the {request_type} reply was sent")

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
            task = asyncio.create_task(handle(message.get("text")))
            pending.add(task)
            task.add_done_callback(pending.discard)
    except WebSocketDisconnect:
        logger.info("Disconnected")
    finally:
        for task in pending:
            task.cancel()
