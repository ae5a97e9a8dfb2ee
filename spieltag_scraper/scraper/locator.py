"""Locate fixture-bearing elements on a matchday page."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from bs4 import Tag

from spieltag_scraper import config
from spieltag_scraper.scraper.models import PageContent

logger = logging.getLogger(__name__)


def locate_with_strategy(
    page: PageContent,
    selectors: Sequence[Tuple[str, str]] = config.MATCH_SELECTORS,
) -> Tuple[Optional[str], List[Tag]]:
    """Return the name and hits of the first selector that matches anything.

    Hits of different selectors are never merged; a later selector is only
    tried when every earlier one came back empty.
    """
    for name, selector in selectors:
        elements = page.soup.select(selector)
        if elements:
            logger.debug(f"Selector '{name}' ({selector}) matched {len(elements)} elements")
            return name, elements
    logger.debug(f"No fixture selector matched on {page.url}")
    return None, []


def locate(
    page: PageContent,
    selectors: Sequence[Tuple[str, str]] = config.MATCH_SELECTORS,
) -> List[Tag]:
    _, elements = locate_with_strategy(page, selectors)
    return elements


def selector_counts(
    page: PageContent,
    selectors: Sequence[Tuple[str, str]] = config.MATCH_SELECTORS,
) -> List[Tuple[str, int]]:
    """Hit count of every selector, used when probing a page."""
    return [(name, len(page.soup.select(selector))) for name, selector in selectors]
