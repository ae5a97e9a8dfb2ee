"""Dictionary of Bundesliga club names and free-text team matching."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class TeamEntry:
    name: str
    aliases: Tuple[str, ...] = ()

    @property
    def literals(self) -> Tuple[str, ...]:
        return (self.name, *self.aliases)


@dataclass(frozen=True)
class TeamMention:
    """One dictionary hit inside a block of text."""

    literal: str
    team: str
    start: int
    end: int

    def overlaps(self, start: int, end: int) -> bool:
        return start < self.end and self.start < end


KNOWN_TEAMS: Tuple[TeamEntry, ...] = (
    TeamEntry("Bayern München", ("FC Bayern München", "FC Bayern", "Bayern")),
    TeamEntry("Borussia Dortmund", ("BVB", "Dortmund")),
    TeamEntry("RB Leipzig", ("Leipzig",)),
    TeamEntry("Bayer 04 Leverkusen", ("Bayer Leverkusen", "Leverkusen")),
    TeamEntry("Borussia Mönchengladbach", ("Mönchengladbach", "Gladbach")),
    TeamEntry("VfL Wolfsburg", ("Wolfsburg",)),
    TeamEntry("Eintracht Frankfurt", ("Frankfurt",)),
    TeamEntry("TSG Hoffenheim", ("TSG 1899 Hoffenheim", "Hoffenheim")),
    TeamEntry("SC Freiburg", ("Sport-Club Freiburg", "Freiburg")),
    TeamEntry("1. FC Union Berlin", ("Union Berlin",)),
    TeamEntry("VfB Stuttgart", ("Stuttgart",)),
    TeamEntry("SV Werder Bremen", ("Werder Bremen", "Bremen")),
    TeamEntry("FC Augsburg", ("Augsburg",)),
    TeamEntry("1. FSV Mainz 05", ("Mainz 05", "Mainz")),
    TeamEntry("1. FC Köln", ("FC Köln", "Köln")),
    TeamEntry("FC St. Pauli", ("St. Pauli",)),
    TeamEntry("Hamburger SV", ("HSV", "Hamburg")),
    TeamEntry("1. FC Heidenheim", ("1. FC Heidenheim 1846", "Heidenheim")),
)


@lru_cache(maxsize=8)
def _literal_table(teams: Tuple[TeamEntry, ...]) -> Tuple[Tuple[str, str, re.Pattern], ...]:
    """(literal, canonical name, pattern) rows, longest literal first."""
    rows = [
        (literal, entry.name, re.compile(rf"(?<!\w){re.escape(literal)}(?!\w)"))
        for entry in teams
        for literal in entry.literals
    ]
    rows.sort(key=lambda row: (-len(row[0]), row[0]))
    return tuple(rows)


def find_mentions(text: Optional[str], teams: Sequence[TeamEntry] = KNOWN_TEAMS) -> List[TeamMention]:
    """Return team mentions in order of preference (longest literal first).

    A candidate is dropped when its span overlaps a mention already accepted or
    when its literal is contained in an accepted literal, so "Mainz" never
    shadows "1. FSV Mainz 05".
    """
    if not text:
        return []
    accepted: List[TeamMention] = []
    for literal, canonical, pattern in _literal_table(tuple(teams)):
        for match in pattern.finditer(text):
            start, end = match.span()
            if any(m.overlaps(start, end) for m in accepted):
                continue
            if any(literal != m.literal and literal in m.literal for m in accepted):
                continue
            accepted.append(TeamMention(literal, canonical, start, end))
    return accepted


def distinct_teams(mentions: Iterable[TeamMention]) -> List[TeamMention]:
    """Keep the first mention of every canonical team."""
    seen: set[str] = set()
    unique: List[TeamMention] = []
    for mention in mentions:
        if mention.team in seen:
            continue
        seen.add(mention.team)
        unique.append(mention)
    return unique


def resolve_pair(text: Optional[str], teams: Sequence[TeamEntry] = KNOWN_TEAMS) -> Optional[Tuple[str, str]]:
    """Pick (home, away) from free text.

    The two most preferred distinct teams are chosen, then ordered by where
    they appear in the text.
    """
    chosen = distinct_teams(find_mentions(text, teams))[:2]
    if len(chosen) < 2:
        return None
    home, away = sorted(chosen, key=lambda m: m.start)
    return home.team, away.team


def canonical_team(text: Optional[str], teams: Sequence[TeamEntry] = KNOWN_TEAMS) -> Optional[str]:
    """Map a short label (e.g. a team container) to its canonical club name."""
    mentions = find_mentions(text, teams)
    if not mentions:
        return None
    return mentions[0].team
