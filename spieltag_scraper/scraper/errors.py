"""Exceptions raised while crawling and parsing matchday pages."""

from __future__ import annotations

from typing import Optional


class ScraperError(Exception):
    """Base class for scraper errors."""


class FetchError(ScraperError):
    """Raised when a page cannot be loaded (network failure, timeout, bad status)."""

    def __init__(self, url: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"{url}: {message}")
        self.url = url
        self.cause = cause


class NoFixturesFound(ScraperError):
    """A matchday page carried no recognisable fixtures."""

    def __init__(self, matchday_index: int, url: Optional[str] = None):
        super().__init__(f"No fixtures found for matchday {matchday_index}")
        self.matchday_index = matchday_index
        self.url = url


class ParseAnomaly(ScraperError):
    """A single fixture candidate failed validation."""
