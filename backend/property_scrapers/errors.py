"""
Exceptions raised by the property scraper.

Every failure a caller can see is one of these named conditions so the
calling layer can pick a remediation (ask the user for manual entry,
retry once, report a broken adapter).
"""

from typing import List, Optional


class ScraperError(Exception):
    """Base class for scraper exceptions."""

    # Whether the caller may reasonably retry the same URL later
    retryable = False


class UnsupportedSiteError(ScraperError):
    """Raised when a URL's host matches no registered site adapter."""

    def __init__(self, url: str, host: Optional[str] = None):
        self.url = url
        self.host = host
        super().__init__(f"Unsupported website: {host or url}")


class RenderFetchError(ScraperError):
    """Raised when a page fetch returns a non-success status or fails on the network."""

    retryable = True

    def __init__(self, url: str, status_code: Optional[int] = None, reason: Optional[str] = None):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        if status_code is not None:
            message = f"HTTP {status_code} for {url}"
        else:
            message = f"Failed to fetch {url}: {reason or 'network error'}"
        super().__init__(message)


class RenderTimeoutError(ScraperError):
    """Raised when rendering timed out without producing any usable content."""

    retryable = True

    def __init__(self, url: str, timeout: float):
        self.url = url
        self.timeout = timeout
        super().__init__(f"Timed out after {timeout:.1f}s rendering {url}")


class ExtractionError(ScraperError):
    """Raised when a page rendered but its required fields could not be extracted."""

    def __init__(self, url: str, missing_fields: List[str]):
        self.url = url
        self.missing_fields = list(missing_fields)
        super().__init__(
            f"Could not extract required fields from {url}: {', '.join(self.missing_fields)}"
        )
