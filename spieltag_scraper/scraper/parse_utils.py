"""Parsing helpers for Bundesliga matchday pages."""

from __future__ import annotations

import asyncio
import random
import re
from datetime import date, datetime, time, timedelta
from typing import Optional

from bs4 import Tag
from dateutil import parser as date_parser
from dateutil import tz

from spieltag_scraper import config

_TIME_PATTERN = re.compile(r"(?<!\d)(\d{1,2}):(\d{2})(?!\d)")
_GERMAN_DATE_PATTERN = re.compile(r"(?<!\d)(\d{1,2})\.(\d{1,2})\.(\d{4})(?!\d)")
_ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")


def clean_text(value: Optional[str]) -> Optional[str]:
    """Normalize whitespace and strip strings."""
    if value is None:
        return None
    return " ".join(value.split()).strip() or None


def node_text(node: Optional[Tag]) -> str:
    """Whitespace-normalised text of a node, empty string when missing."""
    if node is None:
        return ""
    return clean_text(node.get_text(" ")) or ""


async def random_delay(min_ms: int = 200, max_ms: int = 600) -> None:
    """Sleep for a random short duration to avoid hammering the site."""
    await asyncio.sleep(random.uniform(min_ms / 1000, max_ms / 1000))


def site_timezone():
    return tz.gettz(config.SITE_TIMEZONE)


def find_kickoff(text: Optional[str]) -> Optional[time]:
    """Return the first valid HH:MM literal in the text."""
    for match in _TIME_PATTERN.finditer(text or ""):
        hours, minutes = int(match.group(1)), int(match.group(2))
        if hours < 24 and minutes < 60:
            return time(hours, minutes)
    return None


def parse_iso_datetime(raw: Optional[str]) -> Optional[datetime]:
    """Parse a machine-readable date attribute into a site-local datetime.

    Only values carrying a calendar date (``YYYY-MM-DD...``) are accepted;
    time-only values such as ``18:30`` return None.
    """
    text = clean_text(raw)
    if not text or not _ISO_DATE_PREFIX.match(text):
        return None
    try:
        parsed = date_parser.isoparse(text)
    except (ValueError, TypeError, OverflowError):
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=site_timezone())
    return parsed.astimezone(site_timezone())


def find_german_date(text: Optional[str]) -> Optional[date]:
    """Return the first DD.MM.YYYY literal in the text as a date."""
    for match in _GERMAN_DATE_PATTERN.finditer(text or ""):
        day, month, year = (int(part) for part in match.groups())
        try:
            return date(year, month, day)
        except ValueError:
            continue
    return None


def synthesize_date(today: date, matchday_index: int, ordinal: int) -> date:
    """Placeholder calendar date: one week per matchday, one day per fixture."""
    return today + timedelta(days=matchday_index * 7 + ordinal)


def combine_local(day: date, kickoff: time) -> datetime:
    """Attach a kickoff time in the site timezone to a calendar date."""
    return datetime.combine(day, time(kickoff.hour, kickoff.minute), tzinfo=site_timezone())


def today_local() -> date:
    return datetime.now(site_timezone()).date()
