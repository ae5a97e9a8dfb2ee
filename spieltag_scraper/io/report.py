"""Assemble the final schedule report."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from spieltag_scraper.scraper.models import CrawlResult, Fixture, Report


def finalize(
    fixtures: Iterable[Fixture],
    teams: Iterable[str],
    *,
    season: str,
    starting_matchday: int,
    generated_at: Optional[datetime] = None,
) -> Report:
    """Build a Report: fixtures by date (stable), teams deduplicated and sorted."""
    ordered = sorted(fixtures, key=lambda fixture: fixture.date)
    return Report(
        generated_at=generated_at or datetime.now(timezone.utc),
        season=season,
        starting_matchday=starting_matchday,
        fixtures=tuple(ordered),
        teams=tuple(sorted({team for team in teams if team})),
    )


def finalize_crawl(result: CrawlResult, generated_at: Optional[datetime] = None) -> Report:
    return finalize(
        result.fixtures,
        result.teams.names(),
        season=result.season,
        starting_matchday=result.start_index,
        generated_at=generated_at,
    )
