"""Crawler implementations for static and JavaScript-rendered sites."""

from .static import StaticCrawler
from .headless import BrowserPool, HeadlessCrawler
from .renderer import Renderer

__all__ = ['StaticCrawler', 'BrowserPool', 'HeadlessCrawler', 'Renderer']
