"""HTTP font adapter.

Implements FontAssetPort by fetching the font from a URL, e.g. the font
file published alongside the site's static assets.
"""

import logging
from typing import Any

import httpx

from siteog.core.ports import FontAssetPort, FontUnavailableError

logger = logging.getLogger(__name__)


class HttpFontAsset(FontAssetPort):
    """Font asset fetched over HTTP with httpx."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the HTTP font adapter.

        Args:
            url: Absolute URL of the font file.
            timeout: Request timeout in seconds.
            client: Optional preconfigured client (used by tests to inject
                a mock transport).
        """
        if not url:
            raise ValueError("url must be a non-empty string")
        self.url = url
        self.client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def __aenter__(self) -> "HttpFontAsset":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.client.aclose()

    async def close(self) -> None:
        """Close the httpx client and clean up resources."""
        await self.client.aclose()

    async def load(self) -> bytes:
        """Fetch the font bytes.

        Raises:
            FontUnavailableError: On transport errors, non-2xx responses
                or an empty body.
        """
        try:
            response = await self.client.get(self.url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise FontUnavailableError(f"Cannot fetch font {self.url}: {e}") from e

        if not response.content:
            raise FontUnavailableError(f"Font response is empty: {self.url}")

        logger.debug(f"Fetched font {self.url} ({len(response.content)} bytes)")
        return response.content
