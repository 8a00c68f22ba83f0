#!/usr/bin/env python3
"""
Scrape a single listing URL from the command line.

Usage:
    cd backend
    python -m property_scrapers.cli URL [--json]

Examples:
    python -m property_scrapers.cli https://www.trulia.com/home/123-main-st   # Scrape and print
    python -m property_scrapers.cli https://www.zillow.com/homedetails/1 --json
    python -m property_scrapers.cli --list                                      # List supported sites
"""

import asyncio
import argparse
import logging
import json
import sys

from .config import get_site_summary
from .errors import ScraperError
from .manager import ScraperManager


def list_sites():
    """List all configured sites."""
    print(f"\n{'='*60}")
    print("Supported Sites")
    print(f"{'='*60}\n")

    for site in get_site_summary():
        status = "✅" if site['enabled'] else "⏳"
        print(f"{status} {site['key']:12} - {site['name']}")
        print(f"              Hosts: {', '.join(site['hosts'])}")
        print(f"              Mode: {site['mode']}")
        print()


def print_property(record: dict):
    """Print a scraped record in a readable layout."""
    print(f"\n{'='*60}")
    print(f"{record['title'] or '(no title)'}")
    print(f"{'='*60}\n")

    print(f"  Address: {record['address']}")
    print(f"  Price: {record['price']:,.0f} ({record['listingType']})")
    print(f"  Type: {record['type']}")
    print(f"  Bedrooms: {record['bedrooms']}")
    print(f"  Bathrooms: {record['bathrooms']}")
    print(f"  Area: {record['area']}")
    print(f"  Year built: {record['yearBuilt']}")
    print(f"  Location: {record['location']}")
    print(f"  Features: {len(record['features'])} found")
    print(f"  Images: {len(record['images'])} found")
    print(f"  Source: {record['source']}")


async def scrape(url: str, as_json: bool = False) -> int:
    """Scrape one URL and print the result. Returns the process exit code."""
    async with ScraperManager() as manager:
        try:
            prop = await manager.scrape_property(url)
        except ScraperError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1

    record = prop.to_dict()
    if as_json:
        print(json.dumps(record, indent=2, ensure_ascii=False))
    else:
        print_property(record)
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Scrape a property listing URL')
    parser.add_argument('url', nargs='?', help='Listing URL to scrape')
    parser.add_argument('--list', action='store_true', help='List supported sites')
    parser.add_argument('--json', action='store_true', help='Print the record as JSON')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.list:
        list_sites()
        return 0

    if not args.url:
        parser.print_help()
        print("\nExample: python -m property_scrapers.cli https://www.trulia.com/home/...")
        return 2

    return asyncio.run(scrape(args.url, as_json=args.json))


if __name__ == '__main__':
    sys.exit(main())
