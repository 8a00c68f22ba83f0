"""
Trulia adapter.

Server-rendered home detail pages with `home-details-summary-*` test ids.
Some layouts drop the per-fact elements and render a single summary line,
which the specs heuristics cover.
"""

from ..base import BaseAdapter


class TruliaAdapter(BaseAdapter):
    """Adapter for trulia.com."""

    site_key = 'trulia'

    ADDRESS = [
        '[data-testid="home-details-summary-address"]',
        '[data-testid="home-details-summary-headline"]',
        'h1[data-testid="address"]',
    ]
    PRICE = [
        '[data-testid="home-details-price-container"]',
        '[data-testid="on-market-price-details"]',
        '.home-price',
    ]
    TYPE = [
        '[data-testid="home-details-summary-property-type"]',
        '[data-testid="property-type"]',
    ]
    STATUS = [
        '[data-testid="home-details-summary-type"]',
        '[data-testid="home-status"]',
    ]
    SPECS = [
        '[data-testid="home-details-summary-specs"]',
        '[data-testid="home-details-summary-container"]',
        '.home-summary-specs',
    ]
    BEDROOMS = [
        '[data-testid="home-details-summary-beds"]',
        '[data-testid="home-summary-size-bedrooms"]',
    ]
    BATHROOMS = [
        '[data-testid="home-details-summary-baths"]',
        '[data-testid="home-summary-size-bathrooms"]',
    ]
    AREA = [
        '[data-testid="home-details-summary-floorspace"]',
        '[data-testid="home-summary-size-floorspace"]',
    ]
    YEAR_BUILT = [
        '[data-testid="home-details-summary-year-built"]',
        '[data-testid="year-built"]',
    ]
    DESCRIPTION = [
        '[data-testid="home-description"]',
        '[data-testid="home-description-text"]',
    ]
    LOCATION = [
        '[data-testid="home-details-summary-region"]',
        '[data-testid="home-details-summary-city-state"]',
    ]
    FEATURES = [
        '[data-testid="home-features"] li',
        '[data-testid="structured-amenities-table"] li',
    ]
    IMAGES = [
        '[data-testid="home-photos"] img',
        '[data-testid="hdp-hero-img-tile"] img',
    ]
