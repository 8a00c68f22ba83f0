"""
Realtor.com adapter.

Detail pages are server-rendered; the listing facts carry stable
`data-testid` attributes, with the older BEM class names kept as fallbacks.
"""

from ..base import BaseAdapter


class RealtorComAdapter(BaseAdapter):
    """
    Adapter for realtor.com.

    Site structure:
    - Beds/baths/sqft each in their own `property-meta-*` element
    - Property type doubles as the rental marker ("Condo for Rent")
    """

    site_key = 'realtor_com'

    ADDRESS = [
        '.PropertyHeading__PropertyAddress',
        '[data-testid="address"]',
        '[data-testid="address-line"]',
    ]
    PRICE = [
        '[data-testid="price"]',
        '[data-testid="list-price"]',
        '.Price__Component',
    ]
    TYPE = [
        '.PropertyType',
        '[data-testid="property-type"]',
    ]
    STATUS = [
        '[data-testid="listing-status"]',
        '.PropertyType',
        '[data-testid="property-type"]',
    ]
    SPECS = [
        '[data-testid="property-meta"]',
        '.PropertyMeta',
    ]
    BEDROOMS = [
        '[data-testid="property-meta-beds"]',
        '.PropertyBedMeta',
    ]
    BATHROOMS = [
        '[data-testid="property-meta-baths"]',
        '.PropertyBathMeta',
    ]
    AREA = [
        '[data-testid="property-meta-sqft"]',
        '.PropertySqftMeta',
    ]
    YEAR_BUILT = [
        '.PropertyDetails [data-testid="property-year-built"]',
        '[data-testid="property-year-built"]',
    ]
    DESCRIPTION = [
        '.PropertyDescription',
        '[data-testid="description"]',
    ]
    LOCATION = [
        '.PropertyLocation',
        '[data-testid="neighborhood"]',
    ]
    FEATURES = [
        '.PropertyFeatures li',
        '[data-testid="features"] li',
    ]
    IMAGES = [
        '[data-testid="property-image-gallery"] img',
        '.PropertyGallery img',
    ]
