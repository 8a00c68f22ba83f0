"""
Static HTML crawler.

This crawler is used for sites that don't require JavaScript rendering.
It's faster and more resource-efficient than the Playwright-based crawler.
"""

from typing import Dict, Optional
import httpx
import logging

from ..errors import RenderFetchError, RenderTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)


class StaticCrawler:
    """
    Wrapper for fetching static HTML pages.

    Uses a pooled httpx.AsyncClient. Each fetch is a single GET: failures are
    reported to the caller as typed errors and never retried here.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the static crawler.

        Args:
            timeout: Default request timeout in seconds
            user_agent: User-Agent header sent with every request
            headers: Custom HTTP headers (replace the defaults)
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.timeout = timeout
        self.headers = headers or {
            'User-Agent': user_agent or DEFAULT_USER_AGENT,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.9',
            'Accept-Encoding': 'gzip, deflate',
        }
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create reusable HTTP client with connection pooling."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                follow_redirects=True,
                timeout=self.timeout,
                headers=self.headers,
                transport=self._transport,
                limits=httpx.Limits(
                    max_keepalive_connections=10,
                    max_connections=20,
                    keepalive_expiry=30.0
                )
            )
        return self._client

    async def close(self):
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def fetch(self, url: str, timeout: Optional[float] = None) -> str:
        """
        Fetch a URL and return HTML content.

        Args:
            url: URL to fetch
            timeout: Request timeout in seconds (defaults to the crawler timeout)

        Returns:
            HTML content as string

        Raises:
            RenderTimeoutError: If the request timed out
            RenderFetchError: On non-2xx status or network failure
        """
        timeout = timeout or self.timeout
        logger.debug(f"StaticCrawler fetching: {url}")
        client = self._get_client()

        try:
            response = await client.get(url, timeout=timeout)
        except httpx.TimeoutException as e:
            logger.warning(f"Timed out after {timeout}s fetching {url}")
            raise RenderTimeoutError(url, timeout) from e
        except httpx.HTTPError as e:
            logger.warning(f"Request failed for {url}: {e}")
            raise RenderFetchError(url, reason=str(e) or e.__class__.__name__) from e

        if not response.is_success:
            logger.warning(f"Got status {response.status_code} for {url}")
            raise RenderFetchError(url, status_code=response.status_code)

        return response.text
