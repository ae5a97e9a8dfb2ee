"""CLI for the Bundesliga matchday TV schedule scraper."""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections import Counter
from pathlib import Path
from typing import Iterable

from spieltag_scraper import config
from spieltag_scraper.io import report as report_sink
from spieltag_scraper.io import save_csv, save_json
from spieltag_scraper.scraper import probe
from spieltag_scraper.scraper.crawler import CrawlController
from spieltag_scraper.scraper.errors import FetchError
from spieltag_scraper.scraper.models import Report
from spieltag_scraper.scraper.page_provider import (
    PageProvider,
    PlaywrightPageProvider,
    StaticPageProvider,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

MODES = ("browser", "static", "probe")


def build_provider(mode: str, headless: bool | None = None) -> PageProvider:
    if mode == "static":
        return StaticPageProvider()
    return PlaywrightPageProvider(headless=headless)


async def run_crawl(args: argparse.Namespace) -> Report:
    async with build_provider(args.mode, headless=args.headless) as provider:
        controller = CrawlController(
            provider,
            season=args.season,
            start_index=args.start_matchday,
        )
        result = await controller.run()
    return report_sink.finalize_crawl(result)


async def run_probe_mode(args: argparse.Namespace) -> int:
    async with build_provider("browser", headless=args.headless) as provider:
        try:
            info = await probe.probe(provider, args.url or config.BASE_URL)
        except FetchError as exc:
            logger.error(f"Probe failed: {exc}")
            return 1
    probe.print_probe(info)
    return 0


def print_summary(report: Report) -> None:
    print(f"{len(report.fixtures)} fixtures, {len(report.teams)} teams")
    print(f"Season: {report.season}, starting matchday: {report.starting_matchday}")
    broadcaster_counter = Counter(fixture.broadcaster for fixture in report.fixtures)
    print("Broadcaster distribution:", dict(broadcaster_counter))
    for fixture in report.fixtures[:3]:
        print(
            f"   {fixture.home_team} vs {fixture.away_team} - "
            f"{fixture.kickoff:%H:%M} ({fixture.broadcaster})"
        )


def persist(report: Report, output: Path, csv_path: Path | None) -> int:
    try:
        json_path = save_json.save_report_json(report, output)
        print(f"Saved report to {json_path}")
        if csv_path is not None:
            print(f"Saved fixtures CSV to {save_csv.save_fixtures_csv(report, csv_path)}")
    except OSError as e:
        logger.error(f"Failed to write output: {e}")
        return 1
    return 0


async def main_async(args: argparse.Namespace) -> int:
    if args.mode == "probe":
        return await run_probe_mode(args)

    report = await run_crawl(args)
    print_summary(report)
    return persist(report, args.output, args.csv)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("matchday must be >= 1")
    return number


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--mode",
        choices=MODES,
        default="browser",
        help="browser: render pages with Playwright; static: plain HTTP; probe: inspect one page.",
    )
    parser.add_argument("--season", default=config.SEASON, help="Season slug, e.g. 2025-2026.")
    parser.add_argument(
        "--start-matchday",
        type=_positive_int,
        default=None,
        help="Skip start detection and begin at this matchday.",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=config.OUTPUT_DIR / config.REPORT_FILENAME,
        help="Where to write the JSON report.",
    )
    parser.add_argument("--csv", type=Path, default=None, help="Also write fixtures as CSV.")
    parser.add_argument("--url", default=None, help="Page to inspect in probe mode.")
    parser.add_argument(
        "--headed",
        dest="headless",
        action="store_false",
        default=None,
        help="Show the browser window.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    return parser.parse_args(argv)


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    return asyncio.run(main_async(args))


if __name__ == "__main__":
    raise SystemExit(main())
