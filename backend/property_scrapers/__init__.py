"""
Property listing scraper.

This package turns a listing URL from a supported real-estate site into a
uniform ScrapedProperty record:
- Site routing by host (static HTTP fetch or headless browser)
- Per-site extraction adapters with prioritized selector fallbacks
- Pure text-to-value normalizers
"""

from .base import BaseAdapter, RenderMode, RenderTarget, SiteConfig, ScrapedProperty, ListingType
from .config import SITES, get_site_config, get_enabled_sites
from .errors import (
    ScraperError,
    UnsupportedSiteError,
    RenderFetchError,
    RenderTimeoutError,
    ExtractionError,
)
from .manager import ScraperManager, ADAPTER_REGISTRY, scrape_property

__all__ = [
    'BaseAdapter',
    'RenderMode',
    'RenderTarget',
    'SiteConfig',
    'ScrapedProperty',
    'ListingType',
    'SITES',
    'get_site_config',
    'get_enabled_sites',
    'ScraperError',
    'UnsupportedSiteError',
    'RenderFetchError',
    'RenderTimeoutError',
    'ExtractionError',
    'ScraperManager',
    'ADAPTER_REGISTRY',
    'scrape_property',
]
