"""Field heuristics for fixture nodes.

Every field is derived by an ordered chain of small strategy functions. Each
strategy either returns a ``FieldResult`` or ``None``; the first non-``None``
result wins. Structural signals come first, free-text signals next, and each
public ``extract_*`` function ends with a fixed fallback so it never raises.
"""

from __future__ import annotations

import logging
import re
from datetime import time
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup, Tag

from spieltag_scraper import config
from spieltag_scraper.filters import broadcasters, teams
from spieltag_scraper.scraper import parse_utils
from spieltag_scraper.scraper.models import FieldResult

logger = logging.getLogger(__name__)

Strategy = Callable[[Tag], Optional[FieldResult]]

_TEAM_CONTAINER_SEL = '[class*="team"]'
_LETTERS = re.compile(r"[^\W\d_]{3,}")


def first_success(strategies: Iterable[Strategy], node: Tag) -> Optional[FieldResult]:
    """Run strategies in order and return the first result."""
    for strategy in strategies:
        try:
            result = strategy(node)
        except Exception as exc:
            logger.debug(f"{strategy.__name__} failed: {exc}")
            continue
        if result is not None:
            return result
    return None


# ---------------------------------------------------------------------------
# Teams
# ---------------------------------------------------------------------------


def _leaf_team_containers(node: Tag) -> List[Tag]:
    containers = node.select(_TEAM_CONTAINER_SEL)
    return [c for c in containers if not c.select_one(_TEAM_CONTAINER_SEL)]


def teams_from_containers(node: Tag) -> Optional[FieldResult]:
    """Side-by-side team containers, e.g. ``.team-name`` or ``.team--home``.

    Dictionary clubs are preferred. A label outside the dictionary is only
    used to complete a pair with one known club, so stray ``.team-stats``
    text never makes a fixture on its own.
    """
    known: List[Tuple[int, str]] = []
    unknown: List[Tuple[int, str]] = []
    for position, container in enumerate(_leaf_team_containers(node)):
        label = parse_utils.node_text(container)
        if not _LETTERS.search(label):
            continue
        name = teams.canonical_team(label)
        if name is None:
            unknown.append((position, label))
        elif name not in (n for _, n in known):
            known.append((position, name))

    if not known:
        return None
    if len(known) >= 2:
        return FieldResult((known[0][1], known[1][1]), 1.0, "team_containers")
    extra = next(((p, label) for p, label in unknown if label != known[0][1]), None)
    if extra is None:
        return None
    pair = tuple(name for _, name in sorted([known[0], extra]))
    return FieldResult(pair, 0.8, "team_containers")


def teams_from_text(node: Tag) -> Optional[FieldResult]:
    """Dictionary match over the node's full text."""
    pair = teams.resolve_pair(parse_utils.node_text(node))
    if pair is None:
        return None
    return FieldResult(pair, 0.7, "team_dictionary")


TEAM_STRATEGIES: Sequence[Strategy] = (teams_from_containers, teams_from_text)


def extract_teams(node: Tag) -> FieldResult:
    """Return ``(home, away)``; value is ``None`` when fewer than two teams are found."""
    return first_success(TEAM_STRATEGIES, node) or FieldResult(None, 0.0, "none")


# ---------------------------------------------------------------------------
# Kickoff
# ---------------------------------------------------------------------------


def kickoff_from_text(node: Tag) -> Optional[FieldResult]:
    kickoff = parse_utils.find_kickoff(parse_utils.node_text(node))
    if kickoff is None:
        return None
    return FieldResult(kickoff, 1.0, "time_literal")


KICKOFF_STRATEGIES: Sequence[Strategy] = (kickoff_from_text,)


def extract_kickoff(node: Tag, default: time = config.DEFAULT_KICKOFF) -> FieldResult:
    return first_success(KICKOFF_STRATEGIES, node) or FieldResult(default, 0.0, "default")


# ---------------------------------------------------------------------------
# Broadcaster
# ---------------------------------------------------------------------------


def _image_broadcaster(scope: Tag) -> Optional[str]:
    for img in scope.find_all("img"):
        for attr in ("alt", "src", "title"):
            name = broadcasters.match_token(img.get(attr))
            if name:
                return name
    return None


def broadcaster_from_images(node: Tag) -> Optional[FieldResult]:
    name = _image_broadcaster(node)
    return FieldResult(name, 1.0, "image") if name else None


def broadcaster_from_text(node: Tag) -> Optional[FieldResult]:
    name = broadcasters.match_text(parse_utils.node_text(node))
    return FieldResult(name, 0.6, "keyword") if name else None


def _ancestors(node: Tag, levels: int) -> List[Tag]:
    found: List[Tag] = []
    parent = node.parent
    while parent is not None and len(found) < levels:
        if isinstance(parent, BeautifulSoup):
            break
        found.append(parent)
        parent = parent.parent
    return found


def broadcaster_from_ancestors(node: Tag, levels: int = config.BROADCASTER_ANCESTOR_LEVELS) -> Optional[FieldResult]:
    for depth, ancestor in enumerate(_ancestors(node, levels), start=1):
        name = _image_broadcaster(ancestor)
        if name:
            return FieldResult(name, 0.5 / depth, f"ancestor_image_{depth}")
        name = broadcasters.match_text(parse_utils.node_text(ancestor))
        if name:
            return FieldResult(name, 0.3 / depth, f"ancestor_keyword_{depth}")
    return None


BROADCASTER_STRATEGIES: Sequence[Strategy] = (
    broadcaster_from_images,
    broadcaster_from_text,
    broadcaster_from_ancestors,
)


def extract_broadcaster(node: Tag) -> FieldResult:
    return first_success(BROADCASTER_STRATEGIES, node) or FieldResult(
        config.UNKNOWN_BROADCASTER, 0.0, "default"
    )


# ---------------------------------------------------------------------------
# Explicit date
# ---------------------------------------------------------------------------


def date_from_time_element(node: Tag) -> Optional[FieldResult]:
    candidates = [node] if node.name == "time" else []
    candidates.extend(node.find_all("time"))
    for element in candidates:
        parsed = parse_utils.parse_iso_datetime(element.get("datetime"))
        if parsed is not None:
            return FieldResult(parsed.date(), 1.0, "time_element")
    return None


def date_from_text(node: Tag) -> Optional[FieldResult]:
    found = parse_utils.find_german_date(parse_utils.node_text(node))
    return FieldResult(found, 0.8, "date_literal") if found else None


DATE_STRATEGIES: Sequence[Strategy] = (date_from_time_element, date_from_text)


def extract_date(node: Tag) -> FieldResult:
    """Explicit calendar date of the fixture; value ``None`` means "synthesize"."""
    return first_success(DATE_STRATEGIES, node) or FieldResult(None, 0.0, "none")
