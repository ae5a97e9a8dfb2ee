"""Dismiss the cookie consent overlay that can hide matchday content."""

from __future__ import annotations

import logging

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from spieltag_scraper import config
from spieltag_scraper.scraper import parse_utils

logger = logging.getLogger(__name__)

_CLICK_BY_TEXT_JS = """
(keywords) => {
    for (const button of document.querySelectorAll('button')) {
        const label = (button.textContent || button.title || button.getAttribute('aria-label') || '').toLowerCase();
        if (keywords.some((keyword) => label.includes(keyword))) {
            button.click();
            return true;
        }
    }
    return false;
}
"""


async def dismiss_consent(page: Page, wait_ms: int = 5_000) -> bool:
    """Best effort: accept the consent banner if one is showing.

    Returns True when a button was clicked. Never raises; callers continue
    with extraction either way.
    """
    try:
        await page.wait_for_selector(config.CONSENT_CONTAINER_SEL, timeout=wait_ms)
    except PlaywrightTimeoutError:
        logger.debug("No consent banner appeared")
    except PlaywrightError as exc:
        logger.warning(f"Consent banner lookup failed: {exc}")
        return False

    for selector in config.CONSENT_BUTTON_SELECTORS:
        try:
            button = page.locator(selector).first
            if await button.count() == 0 or not await button.is_visible():
                continue
            await button.click()
        except PlaywrightError as exc:
            logger.debug(f"Consent selector {selector} not clickable: {exc}")
            continue
        logger.info(f"Consent banner accepted via {selector}")
        await parse_utils.random_delay(1_500, 2_500)
        return True

    try:
        clicked = await page.evaluate(_CLICK_BY_TEXT_JS, list(config.CONSENT_BUTTON_KEYWORDS))
    except PlaywrightError as exc:
        logger.warning(f"Consent banner script click failed: {exc}")
        return False

    if clicked:
        logger.info("Consent banner accepted via script click")
        await parse_utils.random_delay(1_500, 2_500)
        return True

    logger.debug("Consent banner not found or already accepted")
    return False
