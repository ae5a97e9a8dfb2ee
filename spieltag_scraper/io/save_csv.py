"""CSV output helpers for matchday fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pandas as pd

from spieltag_scraper import config
from spieltag_scraper.scraper.models import Report

COLUMNS = (
    "matchdayIndex",
    "date",
    "kickoff",
    "homeTeam",
    "awayTeam",
    "broadcaster",
    "season",
    "sourceUrl",
)


def prepare_rows_for_csv(report: Report) -> List[dict]:
    return [fixture.to_dict() for fixture in report.fixtures]


def save_fixtures_csv(report: Report, output_path: Optional[Path] = None) -> Path:
    """Save the report's fixtures, already in date order, to a flat CSV file."""
    output_path = Path(output_path or config.OUTPUT_DIR / config.CSV_FILENAME)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    df = pd.DataFrame(prepare_rows_for_csv(report), columns=list(COLUMNS))
    df.to_csv(output_path, index=False)
    return output_path
