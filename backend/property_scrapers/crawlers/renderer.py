"""
Renderer: turns a RenderTarget into HTML.

Dispatches on the target's render mode to the static (httpx) or headless
(Playwright) crawler. Errors from either crawler propagate unchanged.
"""

from typing import Optional
import logging

from ..base import RenderMode, RenderTarget
from .static import StaticCrawler
from .headless import BrowserPool, HeadlessCrawler

logger = logging.getLogger(__name__)


class Renderer:
    """
    Mode-dispatching page renderer.

    Usage:
        renderer = Renderer()
        html = await renderer.render(RenderTarget(url, RenderMode.STATIC, 30.0))
        await renderer.close()
    """

    def __init__(
        self,
        static: Optional[StaticCrawler] = None,
        headless: Optional[HeadlessCrawler] = None
    ):
        self.static = static or StaticCrawler()
        self.headless = headless or HeadlessCrawler(BrowserPool())

    async def render(self, target: RenderTarget) -> str:
        """
        Fetch the target URL in the mode it was routed to.

        Raises:
            RenderTimeoutError: Render exceeded the target timeout
            RenderFetchError: Network failure or HTTP error status
        """
        logger.debug(f"Rendering {target.url} ({target.mode.value}, {target.timeout:.0f}s)")
        if target.mode == RenderMode.HEADLESS:
            return await self.headless.fetch(target.url, target.ready_selectors, target.timeout)
        return await self.static.fetch(target.url, target.timeout)

    async def close(self):
        """Release the HTTP client and the browser."""
        try:
            await self.static.close()
        finally:
            await self.headless.pool.close()
