"""
Scraper Manager - orchestrates a single property scrape.

Routes a URL to its site adapter, renders the page in the mode that site
needs, extracts raw fields and normalizes them into a ScrapedProperty.
Failures surface as the named errors in ``errors.py``; nothing is retried
here.
"""

import asyncio
from typing import Dict, List, Mapping, Optional, Type, Union
import logging

from .base import BaseAdapter, ListingType, RenderMode, ScrapedProperty, SiteConfig, AdapterResult
from .config import SITES
from .errors import ExtractionError, ScraperError
from .router import SiteRouter
from .crawlers import BrowserPool, HeadlessCrawler, Renderer, StaticCrawler
from .utils.normalizers import (
    clean_text,
    parse_price,
    parse_count,
    parse_area,
    parse_year,
    normalize_property_type,
    normalize_listing_type,
    normalize_features,
    normalize_images,
)

# Import all site adapters
from .sites.realtor_ca import RealtorCAAdapter
from .sites.realtor_com import RealtorComAdapter
from .sites.trulia import TruliaAdapter
from .sites.zillow import ZillowAdapter

logger = logging.getLogger(__name__)


# Registry of site adapters
# Add new adapters here together with their SiteConfig in config.SITES
ADAPTER_REGISTRY: Dict[str, Type[BaseAdapter]] = {
    'realtor_ca': RealtorCAAdapter,
    'zillow': ZillowAdapter,
    'realtor_com': RealtorComAdapter,
    'trulia': TruliaAdapter,
}


class ScraperManager:
    """
    Scrapes listing URLs into ScrapedProperty records.

    Usage:
        async with ScraperManager() as manager:
            prop = await manager.scrape_property("https://www.trulia.com/home/...")

            # Several URLs at once (headless work stays bounded by the pool)
            results = await manager.scrape_many(urls)
    """

    def __init__(
        self,
        sites: Mapping[str, SiteConfig] = SITES,
        adapters: Mapping[str, Type[BaseAdapter]] = ADAPTER_REGISTRY,
        renderer: Optional[Renderer] = None,
        max_browser_sessions: int = 2,
        static_timeout: float = 30.0,
        headless_timeout: float = 45.0,
        user_agent: Optional[str] = None,
        headless: bool = True
    ):
        """
        Initialize the scraper manager.

        Args:
            sites: Site registry used for routing
            adapters: Site key -> adapter class
            renderer: Pre-built renderer (tests inject a fake one)
            max_browser_sessions: Concurrent headless sessions allowed
            static_timeout: Render timeout for static sites, in seconds
            headless_timeout: Render timeout for headless sites, in seconds
            user_agent: User agent for both crawlers
            headless: Run the browser without a window
        """
        self.router = SiteRouter(
            sites,
            adapters,
            timeouts={
                RenderMode.STATIC: static_timeout,
                RenderMode.HEADLESS: headless_timeout,
            },
        )
        self.renderer = renderer or Renderer(
            static=StaticCrawler(timeout=static_timeout, user_agent=user_agent),
            headless=HeadlessCrawler(
                BrowserPool(max_sessions=max_browser_sessions, headless=headless, user_agent=user_agent),
                timeout=headless_timeout,
            ),
        )

    @classmethod
    def from_settings(cls, settings) -> 'ScraperManager':
        """Build a manager from the application Settings object."""
        return cls(
            max_browser_sessions=settings.scraper_max_browser_sessions,
            static_timeout=settings.scraper_static_timeout,
            headless_timeout=settings.scraper_headless_timeout,
            user_agent=settings.scraper_user_agent,
            headless=settings.scraper_headless,
        )

    async def __aenter__(self) -> 'ScraperManager':
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        """Release the HTTP client and the browser pool."""
        await self.renderer.close()

    async def scrape_property(self, url: str) -> ScrapedProperty:
        """
        Scrape one listing URL.

        Args:
            url: Listing page URL

        Returns:
            ScrapedProperty, possibly with optional fields empty

        Raises:
            UnsupportedSiteError: No adapter for the URL's host (nothing is fetched)
            RenderTimeoutError: The page did not render in time
            RenderFetchError: HTTP error status or network failure
            ExtractionError: Neither an address/title nor a price could be extracted
        """
        adapter, target = self.router.resolve(url)
        logger.info(f"Scraping {url} with {adapter.site_key} ({target.mode.value})")

        html = await self.renderer.render(target)

        raw = adapter.extract(html)
        adapter.log_extraction(url, raw)

        prop = self.normalize(raw, source=adapter.site_key, source_url=url)
        self.check_required(url, prop)
        return prop

    def normalize(self, raw: AdapterResult, source: str = "", source_url: str = "") -> ScrapedProperty:
        """
        Convert an adapter's raw field map into a ScrapedProperty.

        Args:
            raw: Adapter output
            source: Site key of the adapter
            source_url: Scraped URL

        Returns:
            ScrapedProperty
        """
        address = clean_text(raw.get('address'))
        title = clean_text(raw.get('title')) or address

        return ScrapedProperty(
            title=title,
            address=address,
            price=parse_price(raw.get('price')),
            area=parse_area(raw.get('area')),
            location=clean_text(raw.get('location')),
            property_type=normalize_property_type(raw.get('type')),
            listing_type=ListingType(normalize_listing_type(raw.get('listing_type'))),
            bedrooms=parse_count(raw.get('bedrooms')),
            bathrooms=parse_count(raw.get('bathrooms')),
            year_built=parse_year(raw.get('year_built')),
            description=clean_text(raw.get('description')),
            features=normalize_features(raw.get('features')),
            images=normalize_images(raw.get('images')),
            source=source,
            source_url=source_url,
        )

    @staticmethod
    def check_required(url: str, prop: ScrapedProperty):
        """
        Reject a record with no identity and no price.

        Raises:
            ExtractionError: If address, title and price are all missing
        """
        if not prop.address and not prop.title and prop.price == 0:
            logger.warning(f"Required fields missing for {url}: address, price")
            raise ExtractionError(url, ['address', 'price'])

    async def scrape_many(self, urls: List[str]) -> Dict[str, Union[ScrapedProperty, ScraperError]]:
        """
        Scrape several URLs concurrently.

        Args:
            urls: Listing URLs

        Returns:
            Dictionary mapping each URL to its ScrapedProperty or the ScraperError it raised
        """
        logger.info(f"Starting scrape for {len(urls)} URLs")

        tasks = [self.scrape_property(url) for url in urls]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        outcome: Dict[str, Union[ScrapedProperty, ScraperError]] = {}
        for url, result in zip(urls, results):
            if isinstance(result, ScraperError):
                logger.warning(f"Scrape failed for {url}: {result}")
            elif isinstance(result, BaseException):
                raise result
            outcome[url] = result

        succeeded = sum(1 for r in outcome.values() if isinstance(r, ScrapedProperty))
        logger.info(f"Scraped {succeeded}/{len(urls)} URLs")
        return outcome

    def list_sites(self) -> List[Dict]:
        """
        List all configured sites and whether an adapter is registered.

        Returns:
            List of site info dictionaries
        """
        sites = []
        for key, config in self.router.sites.items():
            sites.append({
                'key': key,
                'name': config.name,
                'hosts': list(config.hosts),
                'mode': config.render_mode.value,
                'enabled': config.enabled,
                'implemented': key in self.router.adapters,
                'url': config.base_url,
            })
        return sites

    def get_supported_sites(self) -> List[str]:
        """Get keys of sites that are enabled and have an adapter."""
        return [
            key for key, config in self.router.sites.items()
            if config.enabled and key in self.router.adapters
        ]


# Convenience function for standalone usage

async def scrape_property(url: str) -> ScrapedProperty:
    """
    Scrape a single URL with a throwaway manager.

    Args:
        url: Listing page URL

    Returns:
        ScrapedProperty
    """
    async with ScraperManager() as manager:
        return await manager.scrape_property(url)
