"""Turn one matchday page into fixture records."""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import List, Optional

from bs4 import Tag

from spieltag_scraper import config
from spieltag_scraper.io.dedupe import dedupe_by_key
from spieltag_scraper.scraper import heuristics, locator, parse_utils
from spieltag_scraper.scraper.errors import ParseAnomaly
from spieltag_scraper.scraper.models import Fixture, PageContent

logger = logging.getLogger(__name__)

_HEADING_PATTERN = re.compile(r"(\d+)\.\s*Spieltag", re.IGNORECASE)
_URL_PATTERN = re.compile(r"/spieltag/\d{4}-\d{4}/(\d+)")


def detect_matchday(page: PageContent) -> Optional[int]:
    """Read the current matchday from a heading like "5. Spieltag" or from the URL."""
    for heading in page.soup.select(config.MATCHDAY_HEADING_SEL):
        match = _HEADING_PATTERN.search(parse_utils.node_text(heading))
        if match and int(match.group(1)) >= 1:
            return int(match.group(1))

    match = _URL_PATTERN.search(page.url or "")
    if match and int(match.group(1)) >= 1:
        return int(match.group(1))
    return None


def build_fixture(
    node: Tag,
    ordinal: int,
    matchday_index: int,
    *,
    season: str,
    source_url: str,
    today: date,
) -> Fixture:
    """Build a fixture from one node; raises ParseAnomaly when the node is unusable."""
    teams = heuristics.extract_teams(node)
    if teams.value is None:
        raise ParseAnomaly(f"fewer than two teams in node {ordinal}")
    home_team, away_team = teams.value

    kickoff = heuristics.extract_kickoff(node).value
    broadcaster = heuristics.extract_broadcaster(node).value
    day = heuristics.extract_date(node).value
    if day is None:
        day = parse_utils.synthesize_date(today, matchday_index, ordinal)

    return Fixture(
        matchday_index=matchday_index,
        home_team=home_team,
        away_team=away_team,
        kickoff=kickoff,
        date=parse_utils.combine_local(day, kickoff),
        broadcaster=broadcaster,
        season=season,
        source_url=source_url,
    )


def extract(
    page: PageContent,
    matchday_index: int,
    *,
    season: str = config.SEASON,
    today: Optional[date] = None,
) -> List[Fixture]:
    """Extract the fixtures of one matchday page; empty when none are recognisable."""
    today = today or parse_utils.today_local()
    strategy, nodes = locator.locate_with_strategy(page)
    if not nodes:
        return []

    fixtures: List[Fixture] = []
    for ordinal, node in enumerate(nodes):
        try:
            fixtures.append(
                build_fixture(
                    node,
                    ordinal,
                    matchday_index,
                    season=season,
                    source_url=page.url,
                    today=today,
                )
            )
        except ParseAnomaly as exc:
            logger.debug(f"Matchday {matchday_index}: dropped candidate {ordinal}: {exc}")

    unique = dedupe_by_key(fixtures, key=lambda f: (f.matchday_index, f.home_team, f.away_team))
    logger.debug(
        f"Matchday {matchday_index}: {len(unique)} fixtures from {len(nodes)} '{strategy}' nodes"
    )
    return unique
