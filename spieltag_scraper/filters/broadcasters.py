"""Keyword tables used to infer the broadcaster of a fixture."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional


@dataclass
class BroadcasterBucket:
    name: str
    keywords: List[str]


DEFAULT_BROADCASTERS = [
    BroadcasterBucket("Sky Deutschland", ["sky deutschland", "sky"]),
    BroadcasterBucket("DAZN", ["dazn"]),
    BroadcasterBucket("WOW", ["wow"]),
    BroadcasterBucket("Sport1", ["sport1", "sport 1"]),
    BroadcasterBucket("RTL+", ["rtl+", "rtl"]),
    BroadcasterBucket("Das Erste", ["das erste", "ard"]),
    BroadcasterBucket("ZDF", ["zdf"]),
    BroadcasterBucket("SAT.1", ["sat.1", "sat1"]),
]


def _contains(haystack: str, keyword: str, boundary: str) -> bool:
    return re.search(rf"(?<!{boundary}){re.escape(keyword)}(?!{boundary})", haystack) is not None


def match_token(
    value: Optional[str],
    buckets: Iterable[BroadcasterBucket] = DEFAULT_BROADCASTERS,
) -> Optional[str]:
    """Match attribute tokens such as ``logo-dazn.svg``.

    Keywords must be delimited by non-alphanumerics, so ``matchcard.png``
    is not read as "ard".
    """
    lowered = (value or "").lower()
    if not lowered:
        return None
    for bucket in buckets:
        if any(_contains(lowered, keyword, "[a-z0-9]") for keyword in bucket.keywords):
            return bucket.name
    return None


def match_text(
    text: Optional[str],
    buckets: Iterable[BroadcasterBucket] = DEFAULT_BROADCASTERS,
) -> Optional[str]:
    """Whole-word keyword match for running text."""
    lowered = (text or "").lower()
    if not lowered:
        return None
    for bucket in buckets:
        if any(_contains(lowered, keyword, r"\w") for keyword in bucket.keywords):
            return bucket.name
    return None
