"""
Zillow adapter.

Zillow hydrates its home details client-side and is fetched headless.
Beds, baths and living area are rendered as a row of bare facts
(`.ds-bed-bath-living-area`): "3 bd", "2 ba", "1,850 sqft". Older layouts
drop the units, so the facts are also read by position.
"""

from bs4 import BeautifulSoup

from ..base import BaseAdapter
from ..utils.extractors import (
    nth_text,
    labelled_value,
    extract_bedrooms,
    extract_bathrooms,
    extract_area,
    extract_year_built,
)

BED_BATH_FACT = '.ds-bed-bath-living-area'
FACT_LABELS = '.ds-home-fact-list span, .ds-home-fact-list-item span'


class ZillowAdapter(BaseAdapter):
    """
    Adapter for zillow.com.

    Site structure:
    - Bed/bath/area facts row: first = beds, second = baths, last = living area
    - Facts & features list with "Year built" label/value spans
    - Photo carousel tiles under `.media-stream-tile`
    """

    site_key = 'zillow'

    ADDRESS = [
        '.ds-address-container',
        'h1[class*="Address"]',
        '[data-testid="home-details-summary-address"]',
    ]
    PRICE = [
        '.ds-price',
        '[data-testid="price"]',
        '.ds-summary-row .ds-value',
    ]
    TYPE = [
        '[data-testid="home-type"]',
        '.ds-home-facts-and-features .ds-home-fact-list-item',
    ]
    STATUS = [
        '.ds-status-details',
        '[data-testid="home-status"]',
    ]
    SPECS = [
        '.ds-bed-bath-living-area-container',
        '[data-testid="bed-bath-beyond"]',
        '.ds-summary-row',
    ]
    DESCRIPTION = [
        '.ds-overview-section .ds-expandable-card-section',
        '[data-testid="description"]',
        '.ds-overview-section',
    ]
    LOCATION = [
        '.ds-neighborhood',
        '[data-testid="neighborhood"]',
    ]
    FEATURES = [
        '.ds-home-facts-and-features li',
        '[data-testid="facts-list"] li',
    ]
    IMAGES = [
        '.media-stream-tile img',
        '[data-testid="media-stream"] img',
        'ul.media-stream img',
    ]

    def extract_bedrooms(self, soup: BeautifulSoup, specs: str) -> str:
        return extract_bedrooms(specs) or nth_text(soup, BED_BATH_FACT, 0)

    def extract_bathrooms(self, soup: BeautifulSoup, specs: str) -> str:
        return extract_bathrooms(specs) or nth_text(soup, BED_BATH_FACT, 1)

    def extract_area(self, soup: BeautifulSoup, specs: str) -> str:
        area = extract_area(specs)
        if area:
            return area
        facts = soup.select(BED_BATH_FACT)
        # A lone fact is the bedroom count, not the area
        if len(facts) < 3:
            return ''
        return nth_text(soup, BED_BATH_FACT, -1)

    def extract_year_built(self, soup: BeautifulSoup, specs: str) -> str:
        return labelled_value(soup, FACT_LABELS, 'Year built') or extract_year_built(specs)
