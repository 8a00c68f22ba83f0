"""
Site configurations for all supported listing sources.

Each site has a SiteConfig that defines:
- Host substrings the router matches against
- Render mode (static or headless)
- Content-ready markers for headless rendering
"""

from .base import SiteConfig, RenderMode


# ============================================================
# SITE CONFIGURATIONS
# ============================================================

SITES = {
    # ========== HEADLESS (2 sites) ==========
    # Listing data is hydrated client-side; rendered with Playwright

    'realtor_ca': SiteConfig(
        name='REALTOR.ca',
        key='realtor_ca',
        hosts=('realtor.ca',),
        base_url='https://www.realtor.ca/',
        render_mode=RenderMode.HEADLESS,
        ready_selectors=(
            '[data-testid="listing-price"]',
            '.listingDetailsContent',
            '.propertyDetails',
        ),
    ),

    'zillow': SiteConfig(
        name='Zillow',
        key='zillow',
        hosts=('zillow.com',),
        base_url='https://www.zillow.com/',
        render_mode=RenderMode.HEADLESS,
        ready_selectors=(
            '.ds-price',
            '[data-testid="price"]',
            '.ds-address-container',
        ),
    ),

    # ========== STATIC (2 sites) ==========
    # Server-rendered; a plain HTTP GET is enough

    'realtor_com': SiteConfig(
        name='Realtor.com',
        key='realtor_com',
        hosts=('realtor.com',),
        base_url='https://www.realtor.com/',
        render_mode=RenderMode.STATIC,
    ),

    'trulia': SiteConfig(
        name='Trulia',
        key='trulia',
        hosts=('trulia.com',),
        base_url='https://www.trulia.com/',
        render_mode=RenderMode.STATIC,
    ),
}


# ============================================================
# HELPER FUNCTIONS
# ============================================================

def get_site_config(site_key: str) -> SiteConfig:
    """
    Get configuration for a site by its key.

    Args:
        site_key: Site identifier (e.g., 'realtor_ca', 'zillow')

    Returns:
        SiteConfig for the site

    Raises:
        ValueError: If site_key is not found
    """
    if site_key not in SITES:
        valid_keys = ', '.join(sorted(SITES.keys()))
        raise ValueError(f"Unknown site: '{site_key}'. Valid sites: {valid_keys}")
    return SITES[site_key]


def get_sites_by_mode(render_mode: RenderMode) -> dict:
    """Get all sites rendered with a specific mode."""
    return {k: v for k, v in SITES.items() if v.render_mode == render_mode}


def get_enabled_sites() -> dict:
    """Get all enabled sites."""
    return {k: v for k, v in SITES.items() if v.enabled}


def list_sites() -> list:
    """List all site keys."""
    return list(SITES.keys())


def get_site_summary() -> list:
    """Get a summary of all sites for display."""
    summary = []
    for key, config in SITES.items():
        summary.append({
            'key': key,
            'name': config.name,
            'hosts': list(config.hosts),
            'mode': config.render_mode.value,
            'enabled': config.enabled,
            'url': config.base_url,
        })
    return summary
