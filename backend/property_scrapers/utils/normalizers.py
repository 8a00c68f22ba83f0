"""
Data normalization utilities for scrapers.

These functions turn raw text pulled out of a listing page into typed values.
They never raise: text that cannot be parsed maps to a sentinel (0, None,
empty string or a default) so one bad field cannot fail the whole record.
"""

import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Tuple

DEFAULT_PROPERTY_TYPE = 'House'

SALE = 'SALE'
RENTAL = 'RENTAL'

# Substrings that mark an image URL as a stand-in rather than a real photo
PLACEHOLDER_TOKENS = ('placeholder', 'data:image', 'blank.gif', 'spacer.gif', 'loading.gif')

_CURRENCY_CHARS = re.compile(r'[$€£¥₹,]')
_RANGE_SEPARATORS = ('-', '–', '—')
_MONTHLY_MARKER = re.compile(r'/\s*mo(?:nth)?\b|per\s*mo(?:nth)?\b|monthly')
_NUMBER = re.compile(r'\d+(?:\.\d+)?')
# k/m counts as a multiplier only when no other letter follows it ("1.2m cad", not "2 kitchens")
_PRICE = re.compile(r'(\d+(?:\.\d+)?)(?:\s*([km])(?![a-z]))?')
_MULTIPLIERS = {'k': Decimal(1000), 'm': Decimal(1000000)}


def clean_text(text: Optional[str]) -> str:
    """
    Collapse runs of whitespace and trim.

    Examples:
        "  123  Main\\n St " -> "123 Main St"
        None -> ""
    """
    if not text:
        return ''
    return ' '.join(str(text).split())


def parse_price(price_text: Optional[str]) -> float:
    """
    Parse a listing price into a number.

    Handles:
        $500,000 -> 500000
        $1.2M -> 1200000
        $2,500/month -> 2500
        From $450k -> 450000
        $1.2M CAD -> 1200000
        $2.5k per mo. -> 2500
        $300,000 - $350,000 -> 300000 (lower bound of a range)
        Contact for price -> 0

    The monthly marker is only stripped; whether a listing is a rental is
    reported separately by the listing type.

    Returns:
        Non-negative price, or 0 when no price could be parsed
    """
    if not price_text:
        return 0

    text = str(price_text).lower().strip()
    cleaned = _CURRENCY_CHARS.sub('', text)

    for separator in _RANGE_SEPARATORS:
        if separator in cleaned:
            cleaned = cleaned.split(separator, 1)[0]

    cleaned = _MONTHLY_MARKER.sub(' ', cleaned)
    cleaned = cleaned.replace('from', ' ')

    match = _PRICE.search(cleaned)
    if not match:
        return 0

    multiplier = _MULTIPLIERS.get(match.group(2), Decimal(1))
    try:
        value = Decimal(match.group(1)) * multiplier
    except InvalidOperation:
        return 0

    return float(value)


def parse_count(count_text: Optional[str]) -> Optional[int]:
    """
    Parse a bedroom/bathroom count.

    Examples:
        "3" -> 3
        "4 beds" -> 4
        "2.5 baths" -> 2
        "" -> None
        "0" -> None (counts are positive or absent)
    """
    if not count_text:
        return None

    match = re.search(r'\d+', str(count_text))
    if not match:
        return None

    count = int(match.group(0))
    return count if count > 0 else None


def parse_area(area_text: Optional[str]) -> float:
    """
    Parse a floor area, keeping a single decimal point.

    Examples:
        "1,850 sqft" -> 1850
        "92.5 m²" -> 92.5
        "--" -> 0
    """
    if not area_text:
        return 0

    text = str(area_text).replace(',', '')
    match = _NUMBER.search(text)
    if not match:
        return 0

    try:
        return float(match.group(0))
    except ValueError:
        return 0


def parse_year(year_text: Optional[str]) -> Optional[int]:
    """
    Parse a year built.

    Only plausible construction years are accepted (1600 up to a few years in
    the future for pre-construction listings).

    Examples:
        "1998" -> 1998
        "Built in 2004" -> 2004
        "No Data" -> None
    """
    if not year_text:
        return None

    latest = date.today().year + 5
    for candidate in re.findall(r'(?<!\d)(\d{4})(?!\d)', str(year_text)):
        year = int(candidate)
        if 1600 <= year <= latest:
            return year
    return None


def normalize_property_type(type_text: Optional[str]) -> str:
    """Return the cleaned property type, defaulting to House."""
    return clean_text(type_text) or DEFAULT_PROPERTY_TYPE


def normalize_listing_type(listing_type_text: Optional[str]) -> str:
    """Return RENTAL or SALE; anything unrecognised is treated as a sale."""
    if listing_type_text and clean_text(listing_type_text).upper() == RENTAL:
        return RENTAL
    return SALE


def normalize_features(features: Optional[Iterable[str]]) -> Tuple[str, ...]:
    """Clean feature strings and drop the empty ones, keeping source order."""
    if not features:
        return ()
    cleaned = (clean_text(feature) for feature in features)
    return tuple(feature for feature in cleaned if feature)


def is_placeholder_image(url: str) -> bool:
    """Check whether an image URL is a known placeholder."""
    url_lower = url.lower()
    return any(token in url_lower for token in PLACEHOLDER_TOKENS)


def normalize_images(images: Optional[Iterable[str]]) -> Tuple[str, ...]:
    """
    Strip, drop placeholders and de-duplicate image URLs.

    Order is preserved by first occurrence.
    """
    if not images:
        return ()

    seen = set()
    result = []
    for image in images:
        url = (image or '').strip()
        if not url or url in seen or is_placeholder_image(url):
            continue
        seen.add(url)
        result.append(url)
    return tuple(result)
