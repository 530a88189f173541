"""httpx-backed fetch transport.

Shares one AsyncClient across all fetches so connections are pooled.
"""

import httpx

from ..images.errors import TransportError
from ..logging import get_logger
from .base import FetchResponse, FetchTransport

logger = get_logger("transport")


class HttpxTransport(FetchTransport):
    """Downloads images with an httpx AsyncClient."""

    def __init__(
        self,
        timeout: float = 30,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the transport.

        Args:
            timeout: HTTP request timeout in seconds
            client: Optional preconfigured client; the transport will not close it

        """
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """Return the shared client, creating it on first use."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
            logger.debug("Created httpx client with timeout={}s", self.timeout)
        return self._client

    async def fetch(self, url: str) -> FetchResponse:
        try:
            response = await self.client.get(url)
        except httpx.HTTPError as e:
            logger.debug("Transport failure for {}: {!r}", url[:80], e)
            raise TransportError(url, e) from e

        content_type = response.headers.get("content-type")
        media_type = content_type.split(";")[0].strip() if content_type else None
        logger.debug(
            "Fetched {}: status={}, {} bytes, type={}",
            url[:80],
            response.status_code,
            len(response.content),
            media_type,
        )
        return FetchResponse(
            status_code=response.status_code,
            content=response.content,
            media_type=media_type,
        )

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
