"""Page providers: load a URL and hand back its rendered markup.

``PlaywrightPageProvider`` drives a real Chromium so client-side rendered
matchday pages are complete before extraction. ``StaticPageProvider`` fetches
raw HTML over HTTP and is only useful when the site serves fixtures without
scripts, but needs no browser.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import AsyncExitStack
from typing import Any, Callable, Optional

import requests
from playwright.async_api import Page

from spieltag_scraper import config
from spieltag_scraper.scraper import consent, parse_utils, playwright_driver
from spieltag_scraper.scraper.errors import FetchError
from spieltag_scraper.scraper.models import PageContent

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": config.REQUEST_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "de-DE,de;q=0.9,en;q=0.8",
}


class PageProvider:
    """Base class for page providers.

    Subclasses implement ``_load``. ``fetch`` adds the pause between
    consecutive page loads so callers only have to sequence their calls.
    """

    def __init__(
        self,
        delay_min_ms: int = config.PAGE_DELAY_MIN_MS,
        delay_max_ms: int = config.PAGE_DELAY_MAX_MS,
    ):
        self.delay_min_ms = delay_min_ms
        self.delay_max_ms = delay_max_ms
        self.fetch_count = 0

    async def __aenter__(self) -> "PageProvider":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def fetch(self, url: str) -> PageContent:
        """Load `url`; raises FetchError on network problems or timeouts."""
        if self.fetch_count and self.delay_max_ms > 0:
            await parse_utils.random_delay(self.delay_min_ms, self.delay_max_ms)
        self.fetch_count += 1
        logger.debug(f"Fetching {url}")
        return await self._load(url)

    async def _load(self, url: str) -> PageContent:
        raise NotImplementedError

    def evaluate_in_page(self, page: PageContent, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run a locator or heuristic function against a loaded page."""
        return fn(page, *args, **kwargs)


class PlaywrightPageProvider(PageProvider):
    """Loads pages in a single reused Chromium tab.

    Pass ``page`` to drive an already open tab; the provider then leaves its
    lifetime to the caller.
    """

    def __init__(
        self,
        headless: Optional[bool] = None,
        handle_consent: bool = True,
        settle_ms: int = config.CONTENT_SETTLE_MS,
        page: Optional[Page] = None,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.headless = headless
        self.handle_consent = handle_consent
        self.settle_ms = settle_ms
        self._stack: Optional[AsyncExitStack] = None
        self._page: Optional[Page] = page

    async def __aenter__(self) -> "PlaywrightPageProvider":
        if self._page is not None:
            return self
        self._stack = AsyncExitStack()
        try:
            self._page = await self._stack.enter_async_context(playwright_driver.open_tab(self.headless))
        except BaseException:
            await self._stack.aclose()
            self._stack = None
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._stack is not None:
            await self._stack.aclose()
            self._stack = None
            self._page = None

    async def _load(self, url: str) -> PageContent:
        if self._page is None:
            raise RuntimeError("PlaywrightPageProvider must be used as an async context manager")
        page = self._page
        await playwright_driver.goto(page, url)
        await playwright_driver.wait_for_network_idle(page)
        if self.handle_consent:
            try:
                await consent.dismiss_consent(page)
            except Exception as exc:
                logger.warning(f"Consent handling failed on {url}: {exc}")
        await playwright_driver.settle(page, url, self.settle_ms)
        html = await playwright_driver.rendered_html(page, url)
        return PageContent(url=page.url or url, html=html)


class StaticPageProvider(PageProvider):
    """Plain HTTP fetch without script execution."""

    def __init__(
        self,
        timeout: float = config.REQUEST_TIMEOUT_S,
        session: Optional[requests.Session] = None,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.session.close()

    async def _load(self, url: str) -> PageContent:
        try:
            response = await asyncio.to_thread(self.session.get, url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(url, str(exc), exc) from exc
        return PageContent(url=response.url or url, html=response.text)
