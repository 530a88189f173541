"""
Abstract base class for fetch transports.

Enables swapping the HTTP client used to download images.
"""

from abc import ABC, abstractmethod

import httpx
from pydantic import BaseModel, Field

from ..images.errors import InvalidKeyError

ALLOWED_SCHEMES = {"http", "https"}


class FetchResponse(BaseModel):
    """Status and body returned by a transport."""

    status_code: int = Field(description="HTTP status code")
    content: bytes = Field(default=b"", description="Response body")
    media_type: str | None = Field(default=None, description="Content-Type without parameters")

    @property
    def is_success(self) -> bool:
        """Return True for 2xx responses."""
        return 200 <= self.status_code <= 299


def validate_url(key: str) -> httpx.URL:
    """
    Parse a cache key as a fetchable URL.

    Args:
        key: Resource identifier

    Returns:
        Parsed URL

    Raises:
        InvalidKeyError: If the key is not an absolute http(s) URL
    """
    if not key or not key.strip():
        raise InvalidKeyError(key, "empty URL")
    try:
        url = httpx.URL(key)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise InvalidKeyError(key, str(e)) from e
    if url.scheme not in ALLOWED_SCHEMES:
        raise InvalidKeyError(key, f"unsupported scheme '{url.scheme}'")
    if not url.host:
        raise InvalidKeyError(key, "missing host")
    return url


class FetchTransport(ABC):
    """Abstract interface for downloading image bytes."""

    @abstractmethod
    async def fetch(self, url: str) -> FetchResponse:
        """
        Perform a GET for the URL.

        Non-2xx responses are returned, not raised; the caller decides.

        Args:
            url: Absolute http(s) URL

        Returns:
            Response status, body and content type

        Raises:
            TransportError: On network-level failures
        """
        pass

    async def aclose(self) -> None:
        """Release transport resources."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
