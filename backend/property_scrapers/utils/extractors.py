"""
Data extraction utilities for scrapers.

These functions pull raw text out of parsed listing pages. Fields are looked
up through ordered candidate lists: each candidate is a CSS selector and the
first one that yields non-empty text wins, so a renamed class on the source
site falls through to the next candidate instead of losing the field.
"""

import re
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from .normalizers import clean_text, is_placeholder_image

# Attributes that hold the real image URL on lazy-loaded galleries, in order of preference
LAZY_IMAGE_ATTRS = ('data-src', 'data-lazy-src', 'data-original', 'data-lazy')

# Unit-anchored patterns for the combined specs block
BEDROOMS_PATTERN = re.compile(r'(\d+)\s*(?:bed(?:room)?s?|bds?|br)\b', re.IGNORECASE)
BATHROOMS_PATTERN = re.compile(r'(\d+(?:\.\d+)?)\s*(?:bath(?:room)?s?|ba)\b', re.IGNORECASE)
AREA_PATTERN = re.compile(
    r'(\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)\s*'
    r'(?:sq\.?\s*ft|sqft|square\s*f(?:ee|oo)t|ft²|ft2|sq\.?\s*m\b|m²|m2\b)',
    re.IGNORECASE
)
YEAR_BUILT_PATTERNS = (
    re.compile(r'(?:built|year)\D{0,25}?(\d{4})', re.IGNORECASE),
    re.compile(r'(\d{4})\s*(?:built|construction)', re.IGNORECASE),
)
RENTAL_PATTERN = re.compile(
    r'\b(?:rent(?:s|ed|ers?|ing|als?)?|leas(?:e|ed|es|ing))\b|/\s*mo(?:nth)?\b|per\s+mo(?:nth)?\b',
    re.IGNORECASE
)


def element_text(element: Optional[Tag]) -> str:
    """Get whitespace-collapsed text of an element, or empty string."""
    if element is None:
        return ''
    return clean_text(element.get_text(' ', strip=True))


def first_text(soup: BeautifulSoup, candidates: Sequence[str]) -> str:
    """
    Return text from the first candidate selector that yields non-empty text.

    Args:
        soup: Parsed page
        candidates: CSS selectors, highest priority first

    Returns:
        Text of the first matching element, or empty string
    """
    for selector in candidates:
        for element in soup.select(selector):
            text = element_text(element)
            if text:
                return text
    return ''


def nth_text(soup: BeautifulSoup, selector: str, index: int) -> str:
    """Return text of the element at ``index`` (negative allowed) for a selector."""
    elements = soup.select(selector)
    try:
        return element_text(elements[index])
    except IndexError:
        return ''


def first_list(soup: BeautifulSoup, candidates: Sequence[str]) -> List[str]:
    """
    Return item texts from the first candidate selector that matches anything non-empty.

    Each candidate selects the items themselves (e.g. ``.features li``).
    """
    for selector in candidates:
        items = [element_text(element) for element in soup.select(selector)]
        items = [item for item in items if item]
        if items:
            return items
    return []


def labelled_value(soup: BeautifulSoup, label_selector: str, label: str) -> str:
    """
    Find a label element containing ``label`` and return the text that follows it.

    Used for fact lists rendered as ``<span>Year built</span><span>1998</span>``.
    """
    label_lower = label.lower()
    for element in soup.select(label_selector):
        if label_lower not in element_text(element).lower():
            continue
        sibling = element.find_next_sibling()
        if sibling is not None and element_text(sibling):
            return element_text(sibling)
        # Label and value in the same element: "Year built: 1998"
        text = element_text(element)
        remainder = text[text.lower().index(label_lower) + len(label):].strip(' :')
        if remainder:
            return remainder
    return ''


def extract_bedrooms(specs_text: str) -> str:
    """Extract the bedroom count digits preceding a bed keyword."""
    match = BEDROOMS_PATTERN.search(specs_text or '')
    return match.group(1) if match else ''


def extract_bathrooms(specs_text: str) -> str:
    """Extract the bathroom count preceding a bath keyword."""
    match = BATHROOMS_PATTERN.search(specs_text or '')
    return match.group(1) if match else ''


def extract_area(specs_text: str) -> str:
    """Extract the area figure preceding a square-feet/metres unit."""
    match = AREA_PATTERN.search(specs_text or '')
    return match.group(1) if match else ''


def extract_year_built(specs_text: str) -> str:
    """
    Extract a year near a built/year keyword.

    Handles:
        Built in 1998
        Year Built: 2004
        2010 construction
    """
    for pattern in YEAR_BUILT_PATTERNS:
        match = pattern.search(specs_text or '')
        if match:
            return match.group(1)
    return ''


def detect_listing_type(*texts: str) -> str:
    """
    Decide whether a listing is a rental from price/status/specs text.

    Returns:
        'RENTAL' if any text carries a rental token, otherwise 'SALE'
    """
    for text in texts:
        if text and RENTAL_PATTERN.search(text):
            return 'RENTAL'
    return 'SALE'


def image_url(img: Tag) -> str:
    """
    Get the real URL of an image element.

    Lazy-load attributes win over ``src`` because many galleries put a
    placeholder in ``src`` until the image scrolls into view.
    """
    for attr in LAZY_IMAGE_ATTRS:
        value = (img.get(attr) or '').strip()
        if value and not is_placeholder_image(value):
            return value

    src = (img.get('src') or '').strip()
    if src and not is_placeholder_image(src):
        return src

    srcset = (img.get('srcset') or img.get('data-srcset') or '').strip()
    if srcset:
        first = srcset.split(',')[0].strip().split(' ')[0]
        if first and not is_placeholder_image(first):
            return first

    return ''


def extract_images(soup: BeautifulSoup, candidates: Sequence[str]) -> List[str]:
    """
    Collect gallery image URLs from every candidate selector.

    Args:
        soup: Parsed page
        candidates: CSS selectors matching ``img`` elements

    Returns:
        Image URLs without placeholders or duplicates, in first-seen order
    """
    images = []
    seen = set()
    for selector in candidates:
        for img in soup.select(selector):
            url = image_url(img)
            if url and url not in seen:
                seen.add(url)
                images.append(url)
    return images
