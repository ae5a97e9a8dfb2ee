"""Inspect a live matchday page to see which selectors still match."""

from __future__ import annotations

import json
from typing import Any, Dict

from spieltag_scraper.scraper import locator, matchday, parse_utils
from spieltag_scraper.scraper.models import PageContent
from spieltag_scraper.scraper.page_provider import PageProvider

BODY_SAMPLE_CHARS = 1_000
NODE_SAMPLE_COUNT = 3


def describe_page(page: PageContent) -> Dict[str, Any]:
    soup = page.soup
    h1 = soup.select_one("h1")
    strategy, nodes = locator.locate_with_strategy(page)
    return {
        "url": page.url,
        "title": parse_utils.clean_text(soup.title.get_text()) if soup.title else None,
        "h1": parse_utils.node_text(h1) or None,
        "detected_matchday": matchday.detect_matchday(page),
        "links": len(soup.select("a")),
        "selector_counts": dict(locator.selector_counts(page)),
        "winning_selector": strategy,
        "node_samples": [parse_utils.node_text(node)[:160] for node in nodes[:NODE_SAMPLE_COUNT]],
        "body_text": parse_utils.node_text(soup.body)[:BODY_SAMPLE_CHARS],
    }


async def probe(provider: PageProvider, url: str) -> Dict[str, Any]:
    page = await provider.fetch(url)
    return describe_page(page)


def print_probe(info: Dict[str, Any]) -> None:
    print(f"Title: {info['title']}")
    print(f"URL: {info['url']}")
    print(f"H1: {info['h1']}")
    print(f"Detected matchday: {info['detected_matchday']}")
    print(f"Links: {info['links']}")
    print("[selectors]")
    for name, count in info["selector_counts"].items():
        marker = "*" if name == info["winning_selector"] else " "
        print(f" {marker} {name}: {count}")
    print("[first fixture nodes]")
    print(json.dumps(info["node_samples"], indent=2, ensure_ascii=False))
    print("[page text]")
    print(info["body_text"])
