import asyncio
import hashlib
from collections.abc import Mapping
from typing import Any

import aiohttp

from imdbwatch.cache.resolver import CachedResolver
from imdbwatch.exceptions.scraper_exceptions import UpstreamHttpError

from . import logger

__all__ = [
    "CachedFetcher",
    "request_cache_key",
    "request_json",
    "request_text",
]


def request_cache_key(url: str, method: str = "GET", body: str | None = None) -> str:
    """Cache key of an outbound request; GETs are keyed by URL alone."""
    method = method.upper()
    if method == "GET":
        return f"request:{url}"
    body_hash = hashlib.sha256((body or "").encode("utf-8")).hexdigest()
    return f"request:{method}:{url}:{body_hash}"


def _raise_for_status(url: str, response: aiohttp.ClientResponse) -> None:
    if not 200 <= response.status < 300:
        raise UpstreamHttpError(url=url, status=response.status, reason=response.reason)


async def request_text(
    *,
    session: aiohttp.ClientSession,
    url: str,
    method: str = "GET",
    headers: Mapping[str, str] | None = None,
    body: str | None = None,
) -> str:
    """Execute a request and return the body text of a 2xx response."""
    try:
        async with session.request(method, url, headers=headers, data=body) as response:
            _raise_for_status(url, response)
            return await response.text()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.warning(f"Request to {url} failed. Error: {e}")
        raise UpstreamHttpError(url=url, reason=str(e)) from e
    except UnicodeDecodeError as e:
        raise UpstreamHttpError(url=url, reason=f"undecodable body: {e}") from e


async def request_json(
    *,
    session: aiohttp.ClientSession,
    url: str,
    method: str = "GET",
    headers: Mapping[str, str] | None = None,
    body: str | None = None,
) -> Any:
    """Execute a request and return the decoded JSON body of a 2xx response."""
    try:
        async with session.request(method, url, headers=headers, data=body) as response:
            _raise_for_status(url, response)
            # Some upstreams answer JSON with a text/html content type.
            return await response.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.warning(f"Request to {url} failed. Error: {e}")
        raise UpstreamHttpError(url=url, reason=str(e)) from e
    except ValueError as e:
        raise UpstreamHttpError(url=url, reason=f"invalid JSON body: {e}") from e


class CachedFetcher:
    """Single chokepoint for cached outbound JSON requests."""

    def __init__(
        self,
        *,
        session: aiohttp.ClientSession,
        resolver: CachedResolver,
    ) -> None:
        self.session = session
        self.resolver = resolver

    async def fetch_cached(
        self,
        url: str,
        *,
        ttl_seconds: int,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> Any:
        async def produce() -> Any:
            return await request_json(
                session=self.session,
                url=url,
                method=method,
                headers=headers,
                body=body,
            )

        return await self.resolver.resolve(
            request_cache_key(url, method=method, body=body),
            produce,
            ttl_seconds,
        )
