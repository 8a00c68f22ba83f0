"""
Headless browser crawler for JavaScript-rendered listing pages.

Uses Playwright Chromium. A single browser process is shared; every fetch
gets its own short-lived browser context, handed out by a bounded pool so
that concurrent sessions never exceed the configured limit.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Optional, Sequence
from bs4 import BeautifulSoup
from playwright.async_api import (
    async_playwright,
    Browser,
    Page,
    Playwright,
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
)
import logging

from ..errors import RenderFetchError, RenderTimeoutError
from .static import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

# Seconds allowed for closing a page/context/browser before giving up on it
CLOSE_TIMEOUT = 2.0
# Seconds allowed for serializing the DOM once the page is ready
CONTENT_TIMEOUT = 10.0
# Seconds allowed for launching the browser
LAUNCH_TIMEOUT = 30.0
# Seconds allowed for opening a context or page
OPEN_TIMEOUT = 10.0

BrowserLauncher = Callable[[], Awaitable[Browser]]


async def _close_quietly(resource, name: str):
    """Close a Playwright resource with a timeout, logging instead of raising."""
    try:
        await asyncio.wait_for(resource.close(), timeout=CLOSE_TIMEOUT)
    except asyncio.TimeoutError:
        logger.warning(f"{name} close timed out, forcing cleanup")
    except Exception as e:
        logger.warning(f"Error closing {name}: {e}")


class BrowserPool:
    """
    Bounded pool of headless browser sessions.

    Sessions are acquired with ``async with pool.session() as page``. The
    context behind the page is closed when the block exits, whether it
    returns, raises, times out or is cancelled. Callers beyond
    ``max_sessions`` wait for a free slot.
    """

    def __init__(
        self,
        max_sessions: int = 2,
        headless: bool = True,
        user_agent: Optional[str] = None,
        launcher: Optional[BrowserLauncher] = None
    ):
        """
        Initialize the pool. The browser itself is launched on first use.

        Args:
            max_sessions: Maximum number of concurrent sessions
            headless: Run browser in headless mode
            user_agent: User agent for new contexts
            launcher: Optional coroutine factory returning a Browser (used by tests)
        """
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")

        self.max_sessions = max_sessions
        self.headless = headless
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self._launcher = launcher
        self._semaphore = asyncio.Semaphore(max_sessions)
        self._launch_lock = asyncio.Lock()
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

        # Session accounting
        self.acquired = 0
        self.released = 0

    @property
    def in_use(self) -> int:
        """Number of sessions currently checked out."""
        return self.acquired - self.released

    async def _launch(self) -> Browser:
        """Start Playwright and launch Chromium."""
        if self._launcher is not None:
            return await self._launcher()

        self._playwright = await async_playwright().start()
        logger.debug("Launching Chromium browser...")
        return await self._playwright.chromium.launch(
            headless=self.headless,
            args=[
                '--disable-dev-shm-usage',
                '--no-sandbox',
                '--disable-setuid-sandbox',
                '--disable-gpu',
            ],
            handle_sigint=False,
            handle_sigterm=False,
            handle_sighup=False,
        )

    async def _get_browser(self) -> Browser:
        """Return the shared browser, relaunching it if it has disconnected."""
        async with self._launch_lock:
            if self._browser is not None and not self._browser.is_connected():
                logger.warning("Browser disconnected, relaunching...")
                await self._shutdown()
            if self._browser is None:
                try:
                    self._browser = await asyncio.wait_for(self._launch(), timeout=LAUNCH_TIMEOUT)
                except asyncio.TimeoutError:
                    logger.error(f"Browser launch timed out after {LAUNCH_TIMEOUT:.1f}s")
                    await self._shutdown()
                    raise
                except Exception as e:
                    logger.error(f"Failed to launch browser: {e}")
                    await self._shutdown()
                    raise
        return self._browser

    @asynccontextmanager
    async def session(self) -> AsyncIterator[Page]:
        """
        Acquire a fresh page in its own browser context.

        Yields:
            Playwright Page, valid until the block exits

        Raises:
            asyncio.TimeoutError: Launching the browser or opening the context/page hung
        """
        async with self._semaphore:
            browser = await self._get_browser()
            context = await asyncio.wait_for(
                browser.new_context(
                    viewport={'width': 1600, 'height': 1000},
                    user_agent=self.user_agent,
                    locale='en-US',
                ),
                timeout=OPEN_TIMEOUT
            )
            self.acquired += 1
            logger.debug(f"Browser session acquired ({self.in_use}/{self.max_sessions} in use)")
            try:
                page = await asyncio.wait_for(context.new_page(), timeout=OPEN_TIMEOUT)
                yield page
            finally:
                try:
                    await _close_quietly(context, 'context')
                finally:
                    self.released += 1
                    logger.debug(f"Browser session released ({self.in_use}/{self.max_sessions} in use)")

    async def _shutdown(self):
        if self._browser is not None:
            await _close_quietly(self._browser, 'browser')
            self._browser = None

        if self._playwright is not None:
            try:
                await asyncio.wait_for(self._playwright.stop(), timeout=CLOSE_TIMEOUT)
            except asyncio.TimeoutError:
                logger.warning("Playwright stop timed out, forcing cleanup")
            except Exception as e:
                logger.warning(f"Error stopping playwright: {e}")
            self._playwright = None

    async def close(self):
        """Close the browser and stop Playwright."""
        async with self._launch_lock:
            await self._shutdown()


def _has_content(html: str) -> bool:
    """Check whether a serialized DOM has anything inside its body."""
    if not html or not html.strip():
        return False
    soup = BeautifulSoup(html, 'html.parser')
    body = soup.body or soup
    return body.find(True) is not None or bool(body.get_text(strip=True))


class HeadlessCrawler:
    """
    Fetches JavaScript-rendered pages through a BrowserPool.

    After navigation it waits for the first of a set of "content ready"
    selectors. If none appears before the timeout the HTML present at that
    moment is returned anyway and the render is counted as partial.
    """

    def __init__(self, pool: BrowserPool, timeout: float = 45.0):
        """
        Initialize the headless crawler.

        Args:
            pool: Browser session pool
            timeout: Default render timeout in seconds
        """
        self.pool = pool
        self.timeout = timeout
        self.partial_renders = 0

    async def fetch(
        self,
        url: str,
        ready_selectors: Sequence[str] = (),
        timeout: Optional[float] = None
    ) -> str:
        """
        Render a URL and return its HTML.

        Args:
            url: URL to fetch
            ready_selectors: CSS selectors, any one of which marks the listing as hydrated
            timeout: Render budget in seconds, counted from session acquisition

        Returns:
            HTML content as string

        Raises:
            RenderTimeoutError: Nothing rendered within the budget, or no browser session could be opened
            RenderFetchError: HTTP error status or navigation failure
        """
        timeout = timeout or self.timeout

        try:
            async with self.pool.session() as page:
                loop = asyncio.get_running_loop()
                deadline = loop.time() + timeout

                ready = await self._navigate(page, url, timeout)

                if ready and ready_selectors:
                    remaining = deadline - loop.time()
                    ready = await self._wait_until_ready(page, ready_selectors, remaining)

                await self._trigger_lazy_load(page)

                try:
                    html = await asyncio.wait_for(page.content(), timeout=CONTENT_TIMEOUT)
                except asyncio.TimeoutError as e:
                    raise RenderTimeoutError(url, timeout) from e
                except PlaywrightError as e:
                    # Still navigating after a timed-out goto
                    logger.warning(f"Could not read content of {url}: {e}")
                    if not ready:
                        raise RenderTimeoutError(url, timeout) from e
                    raise RenderFetchError(url, reason=str(e)) from e
        except asyncio.TimeoutError as e:
            logger.warning(f"Could not open a browser session for {url}")
            raise RenderTimeoutError(url, timeout) from e

        if not ready:
            self.partial_renders += 1
            if not _has_content(html):
                logger.warning(f"No content rendered for {url} within {timeout:.1f}s")
                raise RenderTimeoutError(url, timeout)
            logger.warning(
                f"Content-ready markers not found for {url} within {timeout:.1f}s, "
                f"continuing with available content"
            )

        return html

    async def _navigate(self, page: Page, url: str, timeout: float) -> bool:
        """
        Navigate to the URL.

        Returns:
            True once the DOM has loaded, False if the time ran out first
            (whatever was parsed so far stays on the page)
        """
        try:
            response = await asyncio.wait_for(
                page.goto(url, wait_until='domcontentloaded', timeout=int(timeout * 1000)),
                timeout=timeout
            )
        except (asyncio.TimeoutError, PlaywrightTimeoutError):
            logger.warning(f"Navigation timed out after {timeout:.1f}s for {url}")
            return False
        except PlaywrightError as e:
            logger.warning(f"Navigation failed for {url}: {e}")
            raise RenderFetchError(url, reason=str(e)) from e

        if response is not None and response.status >= 400:
            raise RenderFetchError(url, status_code=response.status)
        return True

    async def _wait_until_ready(self, page: Page, selectors: Sequence[str], timeout: float) -> bool:
        """
        Wait for the first selector to appear.

        Returns:
            True if a selector appeared, False if the time ran out first
        """
        if timeout <= 0:
            return False

        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        waits = [
            asyncio.ensure_future(
                page.wait_for_selector(selector, state='attached', timeout=int(timeout * 1000))
            )
            for selector in selectors
        ]

        try:
            pending = set(waits)
            while pending:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    break
                done, pending = await asyncio.wait(
                    pending, timeout=remaining, return_when=asyncio.FIRST_COMPLETED
                )
                for task in done:
                    if not task.cancelled() and task.exception() is None:
                        return True
            return False
        finally:
            for task in waits:
                task.cancel()
            await asyncio.gather(*waits, return_exceptions=True)

    async def _trigger_lazy_load(self, page: Page):
        """Light scroll so lazy galleries swap in their real image URLs."""
        try:
            await asyncio.wait_for(
                page.evaluate("window.scrollTo(0, document.body.scrollHeight / 2)"),
                timeout=CLOSE_TIMEOUT
            )
        except (asyncio.TimeoutError, PlaywrightError) as e:
            logger.debug(f"Scroll skipped: {e}")
