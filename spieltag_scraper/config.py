"""Configuration constants and selectors for the Bundesliga matchday scraper."""

from __future__ import annotations

import os
from datetime import time
from pathlib import Path

# ---------------------------------------------------------------------------
# Project metadata
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parent

# ---------------------------------------------------------------------------
# Crawl settings
# ---------------------------------------------------------------------------

BASE_URL = "https://www.bundesliga.com/de/bundesliga/spieltag"
SEASON = os.getenv("SPIELTAG_SEASON", "2025-2026")

DEFAULT_START_MATCHDAY = 3
LOOKAHEAD_MATCHDAYS = 10
MAX_CONSECUTIVE_FAILURES = 3

DEFAULT_KICKOFF = time(15, 30)
SITE_TIMEZONE = "Europe/Berlin"

UNKNOWN_BROADCASTER = "unknown"

# Broadcaster lookup walks at most this many parent elements
BROADCASTER_ANCESTOR_LEVELS = 3

# Pause between matchday navigations (milliseconds)
PAGE_DELAY_MIN_MS = 800
PAGE_DELAY_MAX_MS = 1_500

# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------

# Evaluated in order; the first selector with any hit wins.
MATCH_SELECTORS = (
    ("liveticker_link", 'a[href*="/liveticker"]'),
    ("match_item", ".match-item"),
    ("fixture", ".fixture"),
    ("match_test_id", '[data-testid*="match"]'),
    ("game_item", ".game-item"),
    ("match_class", '[class*="match"]'),
    ("fixture_class", '[class*="fixture"]'),
)

MATCHDAY_HEADING_SEL = 'h1, .heading, [class*="spieltag"]'

CONSENT_CONTAINER_SEL = (
    '#sp_message_container_893726, .sp_choice_type_11, [id*="cookie"], [class*="cookie"]'
)
CONSENT_BUTTON_SELECTORS = (
    'button[title*="ALLE COOKIES AKZEPTIEREN"]',
    'button:has-text("ALLE COOKIES")',
    'button[class*="cookie"]',
    ".sp_choice_type_11",
    '[title*="Akzeptieren"]',
    '[aria-label*="Akzeptieren"]',
    'button:has-text("Akzeptieren")',
    'button:has-text("Accept")',
    "#sp_message_container_893726 button",
)
CONSENT_BUTTON_KEYWORDS = ("cookie", "akzeptieren", "accept", "alle")

# ---------------------------------------------------------------------------
# Playwright / HTTP settings
# ---------------------------------------------------------------------------

PLAYWRIGHT_HEADLESS = os.getenv("SPIELTAG_HEADLESS", "1").lower() not in ("0", "false", "no")
PLAYWRIGHT_VIEWPORT = {"width": 1200, "height": 800}
PLAYWRIGHT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/123.0.0.0 Safari/537.36"
)
PLAYWRIGHT_LOCALE = "de-DE"
PLAYWRIGHT_LAUNCH_ARGS = ("--no-sandbox", "--disable-setuid-sandbox")
NAVIGATION_TIMEOUT_MS = 30_000
ACTION_TIMEOUT_MS = 10_000
NETWORK_IDLE_TIMEOUT_MS = 15_000
CONTENT_SETTLE_MS = 3_000

REQUEST_USER_AGENT = PLAYWRIGHT_USER_AGENT
REQUEST_TIMEOUT_S = 10

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

OUTPUT_DIR = Path(os.getenv("SPIELTAG_OUTPUT_DIR", PROJECT_ROOT / "output"))
REPORT_FILENAME = "bundesliga-tv-termine.json"
CSV_FILENAME = "bundesliga-tv-termine.csv"


def matchday_url(index: int, season: str | None = None, base_url: str | None = None) -> str:
    """Build the URL of one matchday page."""
    return f"{base_url or BASE_URL}/{season or SEASON}/{index}"
