"""
Bundesliga Matchday TV Schedule Scraper

Crawls the matchday pages of bundesliga.com one round at a time and extracts
every fixture with its kickoff time and broadcaster, even when the markup
shifts between releases.

Usage:
    import asyncio
    from spieltag_scraper import CrawlController, PlaywrightPageProvider, finalize_crawl

    async def crawl():
        async with PlaywrightPageProvider() as provider:
            result = await CrawlController(provider).run()
        return finalize_crawl(result)

    report = asyncio.run(crawl())

CLI Usage:
    python -m spieltag_scraper.main --output bundesliga-tv-termine.json
"""

__version__ = "0.1.0"

from spieltag_scraper.io.report import finalize, finalize_crawl
from spieltag_scraper.scraper.crawler import CrawlController
from spieltag_scraper.scraper.errors import FetchError, NoFixturesFound, ParseAnomaly
from spieltag_scraper.scraper.models import Fixture, PageContent, Report, TeamRegistry
from spieltag_scraper.scraper.page_provider import (
    PageProvider,
    PlaywrightPageProvider,
    StaticPageProvider,
)

__all__ = [
    "CrawlController",
    "FetchError",
    "Fixture",
    "NoFixturesFound",
    "PageContent",
    "PageProvider",
    "ParseAnomaly",
    "PlaywrightPageProvider",
    "Report",
    "StaticPageProvider",
    "TeamRegistry",
    "finalize",
    "finalize_crawl",
]
