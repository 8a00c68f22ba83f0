"""
Tests for the command-line entry point.
"""

import json

import pytest

from property_scrapers import cli
from property_scrapers.manager import ScraperManager

from conftest import FakeRenderer, load_fixture


TRULIA_URL = "https://www.trulia.com/home/123-main-st-springfield-il-62704"


@pytest.fixture
def fake_manager(monkeypatch):
    """Make the CLI build managers over a fake renderer."""
    renderer = FakeRenderer(pages={TRULIA_URL: load_fixture("trulia_listing.html")})
    monkeypatch.setattr(cli, "ScraperManager", lambda: ScraperManager(renderer=renderer))
    return renderer


class TestCli:
    """Test argument handling and output."""

    def test_list_sites(self, capsys):
        assert cli.main(["--list"]) == 0

        out = capsys.readouterr().out
        assert "zillow" in out
        assert "headless" in out

    def test_missing_url(self, capsys):
        assert cli.main([]) == 2

    def test_scrape_json(self, fake_manager, capsys):
        assert cli.main([TRULIA_URL, "--json"]) == 0

        record = json.loads(capsys.readouterr().out)
        assert record["address"] == "123 Main St"
        assert record["price"] == 450000
        assert fake_manager.closed is True

    def test_scrape_readable(self, fake_manager, capsys):
        assert cli.main([TRULIA_URL]) == 0

        out = capsys.readouterr().out
        assert "Address: 123 Main St" in out
        assert "Price: 450,000 (SALE)" in out

    def test_unsupported_url(self, fake_manager, capsys):
        assert cli.main(["https://example.com/listing/1"]) == 1

        assert "Unsupported website" in capsys.readouterr().err
