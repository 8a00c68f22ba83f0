"""
Base classes for the property scraper system.

This module defines the data structures shared by every component and the
abstract adapter that all site-specific extractors derive from.
"""

from abc import ABC
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass
from enum import Enum
import logging

from bs4 import BeautifulSoup

from .utils.extractors import (
    first_text,
    first_list,
    extract_bedrooms,
    extract_bathrooms,
    extract_area,
    extract_year_built,
    detect_listing_type,
    extract_images,
)

# Raw field map produced by an adapter, consumed by the normalizers
AdapterResult = Dict[str, Any]


class RenderMode(Enum):
    """How a page must be fetched to expose its listing data."""
    STATIC = "static"           # httpx, no JavaScript
    HEADLESS = "headless"       # Playwright, JavaScript rendering


class ListingType(str, Enum):
    """Whether a listing is offered for sale or for rent."""
    SALE = "SALE"
    RENTAL = "RENTAL"


@dataclass
class SiteConfig:
    """Configuration for a supported listing site."""
    name: str                           # Display name
    key: str                            # Registry identifier (e.g., 'realtor_ca')
    hosts: Tuple[str, ...]              # Host substrings routed to this site
    render_mode: RenderMode             # Which crawler to use
    base_url: str = ""                  # Site home page, informational
    ready_selectors: Tuple[str, ...] = ()  # Markers present once listing data has hydrated
    enabled: bool = True                # Whether the router accepts this site


@dataclass(frozen=True)
class RenderTarget:
    """A URL and the way it must be rendered, decided once per scrape."""
    url: str
    mode: RenderMode
    timeout: float
    ready_selectors: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ScrapedProperty:
    """Standardized listing data after scraping."""
    title: str
    address: str
    price: float
    area: float
    location: str = ""
    property_type: str = "House"
    listing_type: ListingType = ListingType.SALE
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    year_built: Optional[int] = None
    description: str = ""
    features: Tuple[str, ...] = ()
    images: Tuple[str, ...] = ()

    # Provenance
    source: str = ""
    source_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the record shape the CRM import expects."""
        return {
            'title': self.title,
            'address': self.address,
            'price': self.price,
            'type': self.property_type,
            'listingType': self.listing_type.value,
            'bedrooms': self.bedrooms,
            'bathrooms': self.bathrooms,
            'area': self.area,
            'description': self.description,
            'features': list(self.features),
            'images': list(self.images),
            'location': self.location,
            'yearBuilt': self.year_built,
            'source': self.source,
            'sourceUrl': self.source_url,
        }


# Fields reported on every extraction log line
TRACKED_FIELDS = [
    'title', 'address', 'price', 'type', 'bedrooms', 'bathrooms', 'area',
    'year_built', 'description', 'features', 'images', 'location',
]


class BaseAdapter(ABC):
    """
    Abstract base class for all site adapters.

    Subclasses declare an ordered candidate list of CSS selectors per field;
    ``extract()`` takes the first candidate that yields text. Fields that no
    candidate matches come back empty instead of raising.

    Optional overrides:
    - extract_bedrooms() / extract_bathrooms() / extract_area() /
      extract_year_built(): site quirks for the numeric facts
    - extract_listing_type(): custom rental detection
    """

    site_key: str = ""

    TITLE: List[str] = []
    ADDRESS: List[str] = []
    PRICE: List[str] = []
    TYPE: List[str] = []
    STATUS: List[str] = []
    SPECS: List[str] = []
    BEDROOMS: List[str] = []
    BATHROOMS: List[str] = []
    AREA: List[str] = []
    YEAR_BUILT: List[str] = []
    DESCRIPTION: List[str] = []
    LOCATION: List[str] = []
    FEATURES: List[str] = []
    IMAGES: List[str] = []

    def __init__(self):
        self.logger = logging.getLogger(f"scraper.{self.site_key or self.__class__.__name__}")

    def parse_html(self, html: str) -> BeautifulSoup:
        """Parse HTML content with BeautifulSoup."""
        return BeautifulSoup(html or '', 'html.parser')

    def extract(self, html: str) -> AdapterResult:
        """
        Extract raw field values from a rendered listing page.

        Args:
            html: Page HTML

        Returns:
            Dictionary of raw strings (and lists of strings for features/images)
        """
        soup = self.parse_html(html)

        specs = first_text(soup, self.SPECS)
        price = first_text(soup, self.PRICE)
        status = first_text(soup, self.STATUS)
        address = first_text(soup, self.ADDRESS)

        return {
            'title': first_text(soup, self.TITLE) or address,
            'address': address,
            'price': price,
            'type': first_text(soup, self.TYPE),
            'listing_type': self.extract_listing_type(soup, price, status, specs),
            'bedrooms': self.extract_bedrooms(soup, specs),
            'bathrooms': self.extract_bathrooms(soup, specs),
            'area': self.extract_area(soup, specs),
            'year_built': self.extract_year_built(soup, specs),
            'description': first_text(soup, self.DESCRIPTION),
            'features': first_list(soup, self.FEATURES),
            'images': extract_images(soup, self.IMAGES),
            'location': first_text(soup, self.LOCATION),
            'specs': specs,
        }

    def extract_listing_type(self, soup: BeautifulSoup, price: str, status: str, specs: str) -> str:
        return detect_listing_type(price, status, specs)

    def extract_bedrooms(self, soup: BeautifulSoup, specs: str) -> str:
        return first_text(soup, self.BEDROOMS) or extract_bedrooms(specs)

    def extract_bathrooms(self, soup: BeautifulSoup, specs: str) -> str:
        return first_text(soup, self.BATHROOMS) or extract_bathrooms(specs)

    def extract_area(self, soup: BeautifulSoup, specs: str) -> str:
        return first_text(soup, self.AREA) or extract_area(specs)

    def extract_year_built(self, soup: BeautifulSoup, specs: str) -> str:
        return first_text(soup, self.YEAR_BUILT) or extract_year_built(specs)

    def log_extraction(self, url: str, raw: AdapterResult):
        """
        Log which fields were captured and which were missing.

        Args:
            url: Scraped URL
            raw: Adapter output
        """
        captured = [name for name in TRACKED_FIELDS if raw.get(name)]
        missing = [name for name in TRACKED_FIELDS if not raw.get(name)]

        if captured:
            self.logger.info(f"   ➤ {url}: {', '.join(captured)}")
        else:
            self.logger.info(f"   ➤ {url}: no data captured")

        if missing:
            self.logger.info(f"   ✘ missing: {', '.join(missing)}")
