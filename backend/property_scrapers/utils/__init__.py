"""Shared utilities for scrapers."""

from .normalizers import (
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
from .extractors import (
    first_text,
    first_list,
    extract_bedrooms,
    extract_bathrooms,
    extract_area,
    extract_year_built,
    detect_listing_type,
    extract_images,
)

__all__ = [
    'clean_text',
    'parse_price',
    'parse_count',
    'parse_area',
    'parse_year',
    'normalize_property_type',
    'normalize_listing_type',
    'normalize_features',
    'normalize_images',
    'first_text',
    'first_list',
    'extract_bedrooms',
    'extract_bathrooms',
    'extract_area',
    'extract_year_built',
    'detect_listing_type',
    'extract_images',
]
