"""
Pytest configuration and fixtures for the property scraper tests.

Nothing here touches the network: static pages go through
httpx.MockTransport, headless pages through a fake Playwright browser and
the orchestrator through a fake renderer that serves HTML fixtures.
"""

import asyncio
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from api.main import app, get_manager
from property_scrapers.manager import ScraperManager


FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> str:
    """Read an HTML fixture by file name."""
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


class FakeRenderer:
    """
    Renderer stand-in that records every target it is asked to render.

    Pages are looked up by exact URL; ``error`` is raised instead when set.
    """

    def __init__(self, pages=None, error=None):
        self.pages = dict(pages or {})
        self.error = error
        self.targets = []
        self.closed = False

    async def render(self, target):
        self.targets.append(target)
        if self.error is not None:
            raise self.error
        return self.pages.get(target.url, "<html><body></body></html>")

    async def close(self):
        self.closed = True


# ============================================================
# FAKE PLAYWRIGHT OBJECTS
# ============================================================

class FakeResponse:
    def __init__(self, status: int = 200):
        self.status = status


class FakePage:
    """
    Minimal Page: navigates, exposes some selectors and returns fixed HTML.

    Selectors not listed in ``present`` never appear; their waits hang until
    cancelled.
    """

    def __init__(
        self,
        html: str = "<html><body><div class='listing'>ok</div></body></html>",
        status: int = 200,
        present=(),
        goto_delay: float = 0,
        goto_error: Exception = None,
        ready_delay: float = 0,
        content_error: Exception = None,
    ):
        self.html = html
        self.content_error = content_error
        self.status = status
        self.present = set(present)
        self.goto_delay = goto_delay
        self.goto_error = goto_error
        self.ready_delay = ready_delay
        self.visited = []

    async def goto(self, url, wait_until=None, timeout=None):
        self.visited.append(url)
        if self.goto_delay:
            await asyncio.sleep(self.goto_delay)
        if self.goto_error is not None:
            raise self.goto_error
        return FakeResponse(self.status)

    async def wait_for_selector(self, selector, state=None, timeout=None):
        if selector in self.present:
            await asyncio.sleep(self.ready_delay)
            return object()
        if timeout is not None and timeout < 1000:
            await asyncio.sleep(timeout / 1000)
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")
        await asyncio.sleep(3600)

    async def evaluate(self, script):
        return None

    async def content(self):
        if self.content_error is not None:
            raise self.content_error
        return self.html


class FakeContext:
    def __init__(self, browser, page):
        self.browser = browser
        self.page = page
        self.closed = False

    async def new_page(self):
        return self.page

    async def close(self):
        self.closed = True
        self.browser.open_contexts -= 1


class FakeBrowser:
    """Browser that hands out FakePages built by ``page_factory``."""

    def __init__(self, page_factory=FakePage, context_delay: float = 0):
        self.page_factory = page_factory
        self.context_delay = context_delay
        self.contexts = []
        self.open_contexts = 0
        self.max_open_contexts = 0
        self.connected = True
        self.closed = False

    def is_connected(self):
        return self.connected

    async def new_context(self, **kwargs):
        if self.context_delay:
            await asyncio.sleep(self.context_delay)
        context = FakeContext(self, self.page_factory())
        self.contexts.append(context)
        self.open_contexts += 1
        self.max_open_contexts = max(self.max_open_contexts, self.open_contexts)
        return context

    async def close(self):
        self.closed = True
        self.connected = False


class FakeLauncher:
    """Injectable launcher that counts browser launches."""

    def __init__(self, page_factory=FakePage, launch_delay: float = 0, context_delay: float = 0):
        self.page_factory = page_factory
        self.launch_delay = launch_delay
        self.context_delay = context_delay
        self.browsers = []

    async def __call__(self):
        if self.launch_delay:
            await asyncio.sleep(self.launch_delay)
        browser = FakeBrowser(self.page_factory, self.context_delay)
        self.browsers.append(browser)
        return browser

    @property
    def browser(self):
        return self.browsers[-1]


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture
def html():
    """Return the fixture loader."""
    return load_fixture


@pytest.fixture
def fake_renderer():
    """Fake renderer serving the site fixtures at realistic URLs."""
    return FakeRenderer(pages={
        "https://www.trulia.com/home/123-main-st-springfield-il-62704": load_fixture("trulia_listing.html"),
        "https://www.realtor.com/realestateandhomes-detail/456-Oak-Ave_Austin_TX": load_fixture("realtor_com_rental.html"),
        "https://www.realtor.com/realestateandhomes-detail/77-Harbor-Rd_Portland_ME": load_fixture("realtor_com_degraded.html"),
        "https://www.realtor.ca/real-estate/26543210/12-maple-cres-toronto": load_fixture("realtor_ca_listing.html"),
        "https://www.zillow.com/homedetails/789-Pine-St-Seattle-WA/1234_zpid/": load_fixture("zillow_listing.html"),
    })


@pytest.fixture
def manager(fake_renderer):
    """Scraper manager wired to the fake renderer."""
    return ScraperManager(renderer=fake_renderer)


@pytest.fixture(scope="function")
def client(manager):
    """Create a test client with the scraper manager override."""
    app.dependency_overrides[get_manager] = lambda: manager

    # Use TestClient directly without context manager so the real browser is never built
    test_client = TestClient(app)
    yield test_client

    app.dependency_overrides.clear()
