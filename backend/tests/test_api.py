"""
Tests for API endpoints.
"""

import pytest
from fastapi import status

from api.main import app, get_manager
from property_scrapers.errors import ExtractionError, RenderFetchError, RenderTimeoutError
from property_scrapers.manager import ScraperManager

from conftest import FakeRenderer


TRULIA_URL = "https://www.trulia.com/home/123-main-st-springfield-il-62704"


@pytest.fixture
def failing_client(client):
    """Return a factory that swaps in a manager whose renderer raises ``error``."""
    def use_error(error):
        manager = ScraperManager(renderer=FakeRenderer(error=error))
        app.dependency_overrides[get_manager] = lambda: manager
        return client
    return use_error


class TestRootEndpoint:
    """Test the root endpoint."""

    def test_root_returns_json(self, client):
        """Test that root endpoint returns expected JSON."""
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Property Scraper API"
        assert "version" in data

    def test_favicon(self, client):
        response = client.get("/favicon.ico")
        assert response.status_code == status.HTTP_204_NO_CONTENT


class TestSitesEndpoint:
    """Test the supported sites listing."""

    def test_list_sites(self, client):
        response = client.get("/api/sites")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert {site["key"] for site in data} == {"realtor_ca", "zillow", "realtor_com", "trulia"}
        modes = {site["key"]: site["mode"] for site in data}
        assert modes["zillow"] == "headless"
        assert modes["trulia"] == "static"


class TestScrapeEndpoint:
    """Test the scrape endpoint and its error mapping."""

    def test_scrape_success(self, client):
        response = client.post("/api/properties/scrape", json={"url": TRULIA_URL})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["address"] == "123 Main St"
        assert data["price"] == 450000
        assert data["bedrooms"] == 3
        assert data["bathrooms"] == 2
        assert data["type"] == "House"
        assert data["listingType"] == "SALE"
        assert data["sourceUrl"] == TRULIA_URL

    def test_unsupported_site(self, client):
        response = client.post("/api/properties/scrape", json={"url": "https://example.com/listing/1"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "Unsupported" in response.json()["detail"]

    def test_empty_url(self, client):
        response = client.post("/api/properties/scrape", json={"url": "  "})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_missing_body(self, client):
        response = client.post("/api/properties/scrape", json={})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_fetch_error(self, failing_client):
        client = failing_client(RenderFetchError(TRULIA_URL, status_code=403))

        response = client.post("/api/properties/scrape", json={"url": TRULIA_URL})

        assert response.status_code == status.HTTP_502_BAD_GATEWAY

    def test_timeout(self, failing_client):
        client = failing_client(RenderTimeoutError(TRULIA_URL, 30.0))

        response = client.post("/api/properties/scrape", json={"url": TRULIA_URL})

        assert response.status_code == status.HTTP_504_GATEWAY_TIMEOUT

    def test_extraction_error(self, client):
        url = "https://www.trulia.com/home/empty-page"

        response = client.post("/api/properties/scrape", json={"url": url})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        detail = response.json()["detail"]
        assert detail["missing_fields"] == ["address", "price"]
