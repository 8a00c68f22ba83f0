"""
REALTOR.ca adapter.

Listing pages are rendered client-side, so this site is fetched through the
headless crawler and its adapter reads the hydrated DOM. Bedrooms, bathrooms,
area and year built are not individually addressable; they come from the
regex heuristics over the specs block.
"""

from ..base import BaseAdapter


class RealtorCAAdapter(BaseAdapter):
    """
    Adapter for realtor.ca.

    Site structure:
    - Price inside `.propertyDetails` (class name has changed between redesigns)
    - Specs block: unlabeled numbers next to icons ("3 Bedrooms 2 Bathrooms 1,200 sqft")
    - Gallery thumbnails lazy-load through `data-src`
    """

    site_key = 'realtor_ca'

    ADDRESS = [
        '.propertyAddress',
        '[data-testid="listing-address"]',
        '#listingAddress',
        '.address-bar',
    ]
    PRICE = [
        '.propertyDetails .listingPrice',
        '.propertyDetails span[data-testid="listing-price"]',
        '[data-testid="listing-price"]',
        '#listingPrice',
        '.propertyDetails .price',
    ]
    TYPE = [
        '.propertyType',
        '[data-testid="listing-type"]',
        '#propertyDetailsSectionVal_Type',
        '.type',
    ]
    STATUS = [
        '[data-testid="listing-transaction-type"]',
        '.listingTransactionType',
    ]
    SPECS = [
        '.propertyDetailsSectionContentSpecs',
        '.propertySpecs',
        '#propertyDetailsSectionContentSubCon',
        '.specs',
    ]
    DESCRIPTION = [
        '.propertyDescription',
        '[data-testid="listing-description"]',
        '#propertyDescriptionCon',
        '.description',
    ]
    LOCATION = [
        '.propertyNeighborhood',
        '[data-testid="listing-neighborhood"]',
        '.neighborhood',
    ]
    FEATURES = [
        '.propertyDetailsSectionContentFeatures li',
        '[data-testid="listing-features"] li',
        '.features li',
    ]
    IMAGES = [
        '.propertyImage img',
        '[data-testid="listing-photos"] img',
        '.thumbnail img',
    ]
