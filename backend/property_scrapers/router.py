"""
Site router: maps a listing URL to its adapter and render mode.

The router is the only component that looks at hostnames. Adding a site means
adding a SiteConfig entry and an adapter class to the registries it is built
from; nothing downstream branches on the host.
"""

from typing import Dict, Mapping, Optional, Tuple, Type
from urllib.parse import urlparse
import logging

from .base import BaseAdapter, RenderMode, RenderTarget, SiteConfig
from .errors import UnsupportedSiteError

logger = logging.getLogger(__name__)


def extract_host(url: str) -> str:
    """
    Safely extract the lowercase host from a URL.

    Handles URLs with or without protocol:
    - "https://www.realtor.ca/real-estate/123" -> "www.realtor.ca"
    - "zillow.com/homedetails/1" -> "zillow.com"
    - "https://example.com:8080/x" -> "example.com"

    Returns:
        Host name, or empty string if none can be parsed
    """
    url = (url or '').strip()
    if not url:
        return ''
    if '://' not in url:
        url = 'https://' + url

    try:
        parsed = urlparse(url)
    except ValueError:
        return ''
    return (parsed.hostname or '').lower()


class SiteRouter:
    """
    Resolves URLs against a static site registry.

    Usage:
        router = SiteRouter(SITES, ADAPTER_REGISTRY, timeouts)
        adapter, target = router.resolve("https://www.zillow.com/homedetails/...")
    """

    def __init__(
        self,
        sites: Mapping[str, SiteConfig],
        adapters: Mapping[str, Type[BaseAdapter]],
        timeouts: Optional[Dict[RenderMode, float]] = None
    ):
        """
        Initialize the router.

        Args:
            sites: Site key -> SiteConfig, checked in insertion order
            adapters: Site key -> adapter class
            timeouts: Render timeout in seconds per mode
        """
        self.sites = dict(sites)
        self.adapters = dict(adapters)
        self.timeouts = {RenderMode.STATIC: 30.0, RenderMode.HEADLESS: 45.0}
        if timeouts:
            self.timeouts.update(timeouts)
        # Adapters are stateless; one instance per site is shared across scrapes
        self._instances: Dict[str, BaseAdapter] = {}

    def match_site(self, url: str) -> Optional[SiteConfig]:
        """Return the first enabled site whose host pattern occurs in the URL's host."""
        host = extract_host(url)
        if not host:
            return None
        for config in self.sites.values():
            if config.enabled and any(pattern in host for pattern in config.hosts):
                return config
        return None

    def get_adapter(self, site_key: str) -> Optional[BaseAdapter]:
        if site_key not in self.adapters:
            return None
        if site_key not in self._instances:
            self._instances[site_key] = self.adapters[site_key]()
        return self._instances[site_key]

    def resolve(self, url: str) -> Tuple[BaseAdapter, RenderTarget]:
        """
        Pick the adapter and render target for a URL.

        Args:
            url: Listing URL

        Returns:
            Tuple of (adapter, render target)

        Raises:
            UnsupportedSiteError: If no enabled site with an adapter matches
        """
        host = extract_host(url)
        config = self.match_site(url)
        if config is None:
            raise UnsupportedSiteError(url, host)

        adapter = self.get_adapter(config.key)
        if adapter is None:
            logger.warning(f"Site {config.key} matched {host} but has no adapter registered")
            raise UnsupportedSiteError(url, host)

        target = RenderTarget(
            url=url,
            mode=config.render_mode,
            timeout=self.timeouts[config.render_mode],
            ready_selectors=tuple(config.ready_selectors),
        )
        logger.debug(f"Routed {host} -> {config.key} ({config.render_mode.value})")
        return adapter, target
