"""Async HTTP client for the post feed."""
import httpx
from typing import Optional, Any
import logging

from bookcatalog.config import Config
from bookcatalog.errors import DecodeFailure, NetworkFailure
from bookcatalog.feed import NO_STORE_HEADERS, build_feed_params

logger = logging.getLogger(__name__)


class AsyncFeedClient:
    """Async client for the post feed. Single attempt per call, no retries."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        page_size: Optional[int] = None
    ):
        """
        Initialize async client.

        Args:
            base_url: Feed endpoint (defaults to Config.FEED_URL)
            timeout: Request timeout in seconds (defaults to Config.DEFAULT_TIMEOUT)
            page_size: Items requested per page (defaults to Config.FEED_PAGE_SIZE)
        """
        self.base_url = base_url or Config.FEED_URL
        self.timeout = timeout if timeout is not None else Config.DEFAULT_TIMEOUT
        self.page_size = page_size or Config.FEED_PAGE_SIZE

        # Create async HTTP client
        self.client = httpx.AsyncClient(timeout=self.timeout, headers=NO_STORE_HEADERS)

    async def fetch_posts(self, limit: Optional[int] = None) -> Any:
        """
        Fetch one page of posts asynchronously.

        Args:
            limit: Items to request (defaults to the configured page size)

        Returns:
            Decoded JSON body

        Raises:
            NetworkFailure: On transport errors or a non-2xx status
            DecodeFailure: If the body is not valid JSON
        """
        params = build_feed_params(limit if limit is not None else self.page_size)
        logger.info(f"Async fetch: {self.base_url} (limit={params['_limit']})")

        try:
            response = await self.client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            logger.warning(f"Async feed request failed: {e}")
            raise NetworkFailure(f"Request failed: {e}", self.base_url) from e

        if not response.is_success:
            logger.warning(f"Feed returned status {response.status_code}")
            raise NetworkFailure(
                f"HTTP error! Status: {response.status_code}",
                self.base_url,
                response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise DecodeFailure(f"Response body is not valid JSON: {e}") from e

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
