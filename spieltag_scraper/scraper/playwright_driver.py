"""Chromium tab handling for matchday pages.

One tab is opened per crawl and reused for every matchday. Each load runs
``goto`` → network idle → (consent) → settle → ``content``; any Playwright
failure on the way becomes a ``FetchError`` so the crawl counts the page as
empty instead of aborting.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, async_playwright

from spieltag_scraper import config
from spieltag_scraper.scraper.errors import FetchError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_tab(headless: Optional[bool] = None) -> AsyncIterator[Page]:
    """Launch Chromium with a German, Berlin-local context and yield its tab."""
    async with async_playwright() as p:
        browser = await p.chromium.launch(
            headless=config.PLAYWRIGHT_HEADLESS if headless is None else headless,
            args=list(config.PLAYWRIGHT_LAUNCH_ARGS),
        )
        try:
            context = await browser.new_context(
                user_agent=config.PLAYWRIGHT_USER_AGENT,
                locale=config.PLAYWRIGHT_LOCALE,
                timezone_id=config.SITE_TIMEZONE,
                viewport=config.PLAYWRIGHT_VIEWPORT,
            )
            try:
                page = await context.new_page()
                page.set_default_timeout(config.ACTION_TIMEOUT_MS)
                page.set_default_navigation_timeout(config.NAVIGATION_TIMEOUT_MS)
                yield page
            finally:
                await context.close()
        finally:
            await browser.close()


async def goto(page: Page, url: str) -> None:
    try:
        await page.goto(url, wait_until="domcontentloaded")
    except PlaywrightError as exc:
        raise FetchError(url, str(exc), exc) from exc


async def wait_for_network_idle(page: Page, timeout: float = config.NETWORK_IDLE_TIMEOUT_MS) -> None:
    """Wait for network idle; matchday pages poll, so a timeout is not an error."""
    try:
        await page.wait_for_load_state("networkidle", timeout=timeout)
    except PlaywrightError as exc:
        logger.debug(f"Network never went idle on {page.url}: {exc}")


async def settle(page: Page, url: str, ms: int) -> None:
    """Give client-side rendering a fixed pause after the page loaded."""
    if ms <= 0:
        return
    try:
        await page.wait_for_timeout(ms)
    except PlaywrightError as exc:
        raise FetchError(url, str(exc), exc) from exc


async def rendered_html(page: Page, url: str) -> str:
    try:
        return await page.content()
    except PlaywrightError as exc:
        raise FetchError(url, str(exc), exc) from exc
