"""JSON output for the schedule report."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from spieltag_scraper import config
from spieltag_scraper.scraper.models import Report

logger = logging.getLogger(__name__)


def save_report_json(report: Report, output_path: Optional[Path] = None) -> Path:
    """Write the report as UTF-8 JSON. OSError propagates to the caller."""
    output_path = Path(output_path or config.OUTPUT_DIR / config.REPORT_FILENAME)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
    output_path.write_text(payload, encoding="utf-8")
    logger.info(f"Saved {len(report.fixtures)} fixtures to {output_path}")
    return output_path


def load_report_json(path: Path) -> dict:
    """Read a previously written report back as plain data."""
    return json.loads(Path(path).read_text(encoding="utf-8"))
