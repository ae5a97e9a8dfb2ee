"""Shared data models for the Bundesliga matchday scraper."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time
from enum import Enum
from functools import cached_property
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from bs4 import BeautifulSoup

from spieltag_scraper.scraper.errors import ParseAnomaly


@dataclass(frozen=True, slots=True)
class Fixture:
    """One scheduled match, immutable once extracted."""

    matchday_index: int
    home_team: str
    away_team: str
    kickoff: time
    date: datetime
    broadcaster: str
    season: str
    source_url: str

    def __post_init__(self) -> None:
        if self.matchday_index < 1:
            raise ParseAnomaly(f"matchday index must be >= 1, got {self.matchday_index}")
        if not self.home_team or not self.away_team:
            raise ParseAnomaly("fixture needs both a home and an away team")
        if self.home_team == self.away_team:
            raise ParseAnomaly(f"home and away team are identical: {self.home_team}")
        if (self.date.hour, self.date.minute) != (self.kickoff.hour, self.kickoff.minute):
            raise ParseAnomaly(f"date {self.date.isoformat()} disagrees with kickoff {self.kickoff}")

    @property
    def teams(self) -> Tuple[str, str]:
        return self.home_team, self.away_team

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matchdayIndex": self.matchday_index,
            "homeTeam": self.home_team,
            "awayTeam": self.away_team,
            "kickoff": f"{self.kickoff:%H:%M}",
            "date": self.date.isoformat(),
            "broadcaster": self.broadcaster,
            "season": self.season,
            "sourceUrl": self.source_url,
        }


@dataclass(frozen=True, slots=True)
class Report:
    """Final output aggregate."""

    generated_at: datetime
    season: str
    starting_matchday: int
    fixtures: Tuple[Fixture, ...]
    teams: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generatedAt": self.generated_at.isoformat(),
            "season": self.season,
            "startingMatchday": self.starting_matchday,
            "fixtures": [fixture.to_dict() for fixture in self.fixtures],
            "teams": list(self.teams),
        }


class TeamRegistry:
    """Distinct team names seen during one crawl. Only ever grows."""

    def __init__(self, names: Iterable[str] = ()):
        self._names: set[str] = set(names)

    def add(self, fixture: Fixture) -> None:
        self._names.update(fixture.teams)

    def add_all(self, fixtures: Iterable[Fixture]) -> None:
        for fixture in fixtures:
            self.add(fixture)

    def names(self) -> List[str]:
        return sorted(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


class CrawlPhase(Enum):
    DETERMINING_START = "determining_start"
    CRAWLING = "crawling"
    DONE = "done"


@dataclass
class CrawlState:
    """Transient bookkeeping of a single crawl."""

    start_index: int = 0
    current_index: int = 0
    consecutive_failures: int = 0
    pages_fetched: int = 0
    fixtures: List[Fixture] = field(default_factory=list)
    phase: CrawlPhase = CrawlPhase.DETERMINING_START

    @property
    def done(self) -> bool:
        return self.phase is CrawlPhase.DONE


@dataclass(slots=True)
class CrawlResult:
    """What a finished crawl hands to the result sink."""

    season: str
    start_index: int
    fixtures: List[Fixture]
    teams: TeamRegistry
    pages_fetched: int = 0


@dataclass
class PageContent:
    """A loaded page: its final URL and rendered markup."""

    url: str
    html: str

    @cached_property
    def soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.html, "lxml")


@dataclass(frozen=True, slots=True)
class FieldResult:
    """Outcome of one field heuristic."""

    value: Any
    confidence: float = 1.0
    strategy: Optional[str] = None
