"""
Tests for site routing and the site registry.
"""

import pytest

from property_scrapers.base import RenderMode, SiteConfig
from property_scrapers.config import (
    SITES,
    get_site_config,
    get_sites_by_mode,
    get_enabled_sites,
    list_sites,
    get_site_summary,
)
from property_scrapers.errors import UnsupportedSiteError
from property_scrapers.manager import ADAPTER_REGISTRY
from property_scrapers.router import SiteRouter, extract_host
from property_scrapers.sites import RealtorCAAdapter, RealtorComAdapter, TruliaAdapter, ZillowAdapter


@pytest.fixture
def router():
    return SiteRouter(SITES, ADAPTER_REGISTRY)


class TestExtractHost:
    """Test hostname extraction."""

    @pytest.mark.parametrize("url,expected", [
        ("https://www.realtor.ca/real-estate/123", "www.realtor.ca"),
        ("zillow.com/homedetails/1", "zillow.com"),
        ("https://Example.COM:8080/x", "example.com"),
        ("  https://www.trulia.com/home/1  ", "www.trulia.com"),
        ("", ""),
        (None, ""),
    ])
    def test_extract_host(self, url, expected):
        assert extract_host(url) == expected


class TestSiteRouter:
    """Test URL -> adapter/render target resolution."""

    @pytest.mark.parametrize("url,adapter_class,mode", [
        ("https://www.realtor.ca/real-estate/26543210/12-maple-cres", RealtorCAAdapter, RenderMode.HEADLESS),
        ("https://www.zillow.com/homedetails/1234_zpid/", ZillowAdapter, RenderMode.HEADLESS),
        ("https://www.realtor.com/realestateandhomes-detail/456-Oak", RealtorComAdapter, RenderMode.STATIC),
        ("https://www.trulia.com/home/123-main-st", TruliaAdapter, RenderMode.STATIC),
    ])
    def test_supported_sites(self, router, url, adapter_class, mode):
        adapter, target = router.resolve(url)

        assert isinstance(adapter, adapter_class)
        assert target.url == url
        assert target.mode == mode

    def test_headless_target_carries_ready_selectors(self, router):
        _, target = router.resolve("https://www.zillow.com/homedetails/1234_zpid/")

        assert target.ready_selectors == SITES['zillow'].ready_selectors
        assert target.timeout == 45.0

    def test_static_target_timeout(self, router):
        _, target = router.resolve("https://www.trulia.com/home/1")

        assert target.ready_selectors == ()
        assert target.timeout == 30.0

    def test_custom_timeouts(self):
        router = SiteRouter(SITES, ADAPTER_REGISTRY, timeouts={RenderMode.HEADLESS: 12.0})

        _, target = router.resolve("https://www.realtor.ca/real-estate/1")
        assert target.timeout == 12.0
        _, target = router.resolve("https://www.trulia.com/home/1")
        assert target.timeout == 30.0

    def test_url_without_scheme(self, router):
        adapter, _ = router.resolve("www.trulia.com/home/123")
        assert isinstance(adapter, TruliaAdapter)

    def test_unsupported_host(self, router):
        with pytest.raises(UnsupportedSiteError) as exc_info:
            router.resolve("https://example.com/listing/1")

        assert exc_info.value.host == "example.com"
        assert exc_info.value.retryable is False

    def test_host_mentioned_only_in_query(self, router):
        """Test that a supported host in the query string does not route."""
        with pytest.raises(UnsupportedSiteError):
            router.resolve("https://example.com/redirect?to=www.zillow.com/homedetails/1")

    def test_realtor_com_is_not_realtor_ca(self, router):
        adapter, _ = router.resolve("https://realtor.com/realestateandhomes-detail/1")
        assert isinstance(adapter, RealtorComAdapter)

    def test_garbage_input(self, router):
        with pytest.raises(UnsupportedSiteError):
            router.resolve("")
        with pytest.raises(UnsupportedSiteError):
            router.resolve("not a url")

    def test_disabled_site_not_routed(self):
        sites = dict(SITES)
        sites['trulia'] = SiteConfig(
            name='Trulia', key='trulia', hosts=('trulia.com',),
            render_mode=RenderMode.STATIC, enabled=False,
        )
        router = SiteRouter(sites, ADAPTER_REGISTRY)

        with pytest.raises(UnsupportedSiteError):
            router.resolve("https://www.trulia.com/home/1")

    def test_site_without_adapter(self):
        adapters = {k: v for k, v in ADAPTER_REGISTRY.items() if k != 'zillow'}
        router = SiteRouter(SITES, adapters)

        with pytest.raises(UnsupportedSiteError):
            router.resolve("https://www.zillow.com/homedetails/1")

    def test_resolution_is_deterministic(self, router):
        """Test that the same URL always maps to the same adapter instance and target."""
        url = "https://www.realtor.ca/real-estate/1"
        first = router.resolve(url)
        second = router.resolve(url)

        assert first[0] is second[0]
        assert first[1] == second[1]


class TestSiteRegistry:
    """Test the SITES registry helpers."""

    def test_every_site_has_an_adapter(self):
        assert set(SITES) == set(ADAPTER_REGISTRY)

    def test_adapter_site_keys_match(self):
        for key, adapter_class in ADAPTER_REGISTRY.items():
            assert adapter_class.site_key == key

    def test_headless_sites_have_ready_selectors(self):
        for config in get_sites_by_mode(RenderMode.HEADLESS).values():
            assert config.ready_selectors

    def test_modes(self):
        assert set(get_sites_by_mode(RenderMode.HEADLESS)) == {'realtor_ca', 'zillow'}
        assert set(get_sites_by_mode(RenderMode.STATIC)) == {'realtor_com', 'trulia'}

    def test_get_site_config(self):
        assert get_site_config('zillow').name == 'Zillow'
        with pytest.raises(ValueError):
            get_site_config('craigslist')

    def test_enabled_and_list(self):
        assert set(get_enabled_sites()) == set(SITES)
        assert list_sites() == list(SITES)

    def test_summary(self):
        summary = get_site_summary()
        assert len(summary) == len(SITES)
        assert {'key', 'name', 'hosts', 'mode', 'enabled', 'url'} <= set(summary[0])
