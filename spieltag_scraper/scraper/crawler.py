"""Crawl successive matchday pages until the schedule runs out."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from spieltag_scraper import config
from spieltag_scraper.scraper import matchday
from spieltag_scraper.scraper.errors import FetchError, NoFixturesFound
from spieltag_scraper.scraper.models import (
    CrawlPhase,
    CrawlResult,
    CrawlState,
    Fixture,
    TeamRegistry,
)
from spieltag_scraper.scraper.page_provider import PageProvider

logger = logging.getLogger(__name__)


class CrawlController:
    """Drives one crawl: find the start matchday, then walk forward page by page.

    Pages are fetched strictly one after another. The crawl ends after
    ``max_failures`` consecutive pages without fixtures, or once the index
    passes ``start + lookahead``.
    """

    def __init__(
        self,
        provider: PageProvider,
        *,
        season: str = config.SEASON,
        base_url: str = config.BASE_URL,
        default_start: int = config.DEFAULT_START_MATCHDAY,
        start_index: Optional[int] = None,
        lookahead: int = config.LOOKAHEAD_MATCHDAYS,
        max_failures: int = config.MAX_CONSECUTIVE_FAILURES,
        today: Optional[date] = None,
    ):
        self.provider = provider
        self.season = season
        self.base_url = base_url
        self.default_start = default_start
        self.start_index = start_index
        self.lookahead = lookahead
        self.max_failures = max_failures
        self.today = today
        self.state = CrawlState()
        self._stop_requested = False

    def request_stop(self) -> None:
        """Ask the crawl to finish before the next page is fetched."""
        self._stop_requested = True

    def matchday_url(self, index: int) -> str:
        return config.matchday_url(index, self.season, self.base_url)

    async def determine_start(self) -> int:
        """Resolve the first matchday to crawl from the landing page."""
        if self.start_index is not None:
            logger.info(f"Starting at matchday {self.start_index} (explicit)")
            return self.start_index

        try:
            landing = await self.provider.fetch(self.base_url)
        except FetchError as exc:
            logger.warning(f"Landing page unavailable ({exc}); starting at matchday {self.default_start}")
            return self.default_start

        detected = self.provider.evaluate_in_page(landing, matchday.detect_matchday)
        if detected is None:
            logger.warning(f"No matchday indicator found; starting at matchday {self.default_start}")
            return self.default_start
        logger.info(f"Current matchday: {detected}")
        return detected

    async def run(self) -> CrawlResult:
        state = self.state = CrawlState()
        teams = TeamRegistry()

        state.start_index = await self.determine_start()
        state.current_index = state.start_index
        state.phase = CrawlPhase.CRAWLING

        while not state.done:
            if self._should_stop(state):
                state.phase = CrawlPhase.DONE
                break

            index = state.current_index
            try:
                fixtures = await self._crawl_matchday(index)
            except FetchError as exc:
                state.consecutive_failures += 1
                logger.warning(f"Matchday {index}: fetch failed ({exc})")
            except NoFixturesFound:
                state.consecutive_failures += 1
                logger.info(f"Matchday {index}: no fixtures found")
            else:
                state.consecutive_failures = 0
                state.fixtures.extend(fixtures)
                teams.add_all(fixtures)
                logger.info(f"Matchday {index}: {len(fixtures)} fixtures collected")
            state.current_index += 1

        logger.info(
            f"Crawl finished after {state.pages_fetched} matchday pages: "
            f"{len(state.fixtures)} fixtures, {len(teams)} teams"
        )
        return CrawlResult(
            season=self.season,
            start_index=state.start_index,
            fixtures=list(state.fixtures),
            teams=teams,
            pages_fetched=state.pages_fetched,
        )

    def _should_stop(self, state: CrawlState) -> bool:
        if self._stop_requested:
            logger.info("Stop requested; ending crawl")
            return True
        if state.consecutive_failures >= self.max_failures:
            logger.info(f"{state.consecutive_failures} consecutive empty matchdays; ending crawl")
            return True
        if state.current_index > state.start_index + self.lookahead:
            logger.info(f"Reached look-ahead limit (matchday {state.start_index + self.lookahead})")
            return True
        return False

    async def _crawl_matchday(self, index: int) -> List[Fixture]:
        url = self.matchday_url(index)
        logger.info(f"Scraping matchday {index}: {url}")
        self.state.pages_fetched += 1
        page = await self.provider.fetch(url)
        fixtures = self.provider.evaluate_in_page(
            page, matchday.extract, index, season=self.season, today=self.today
        )
        if not fixtures:
            raise NoFixturesFound(index, url)
        return fixtures
