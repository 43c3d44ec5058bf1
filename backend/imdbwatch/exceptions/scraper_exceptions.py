from fastapi import status

from .base import AppError

__all__ = [
    "WatchlistParseError",
    "UpstreamHttpError",
]


class WatchlistParseError(AppError):
    """Raised when an upstream page or payload does not have the expected shape."""

    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, reason: str | None = None):
        detail = "Scraping did not go as expected, perhaps the structure of the page has changed."
        if reason:
            detail = f"{detail} ({reason})"
        super().__init__(detail)
        self.reason = reason


class UpstreamHttpError(AppError):
    """Raised when an outbound request fails or answers with a non-2xx status."""

    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, url: str, status: int | None = None, reason: str | None = None):
        if status is not None:
            detail = f"Upstream request to {url} failed with status {status}"
        else:
            detail = f"Upstream request to {url} failed"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail)
        self.url = url
        self.status = status
        self.reason = reason
