"""Offline replay of saved cause list captures.

Runs a saved results page (``.html``), court PDF (``.pdf``), extracted PDF text
(``.txt``) or feed payload (``.json``) through the same extractors the live
scraper uses, without Playwright or any network access.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from . import config, feed, html_table, pdf_text
from .config_validation import validate_runtime_config
from .logging_utils import _scraper_event
from .models import CauseListEntry
from .utils import log_line

HTML_SUFFIXES = {".html", ".htm"}


@dataclass
class ReplayConfig:
    fixture_path: Path
    date: str
    court: Optional[str] = None


def parse_fixture(config_obj: ReplayConfig) -> list[CauseListEntry]:
    path = Path(config_obj.fixture_path)
    suffix = path.suffix.lower()

    if suffix in HTML_SUFFIXES:
        return html_table.parse(path.read_text(encoding="utf-8", errors="replace"), config_obj.date)
    if suffix == ".pdf":
        return pdf_text.parse(pdf_text.extract_text(path), config_obj.date)
    if suffix == ".txt":
        return pdf_text.parse(path.read_text(encoding="utf-8", errors="replace"), config_obj.date)
    if suffix == ".json":
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        return feed.parse_feed(payload, config_obj.date, config_obj.court or config.DEFAULT_COURT)

    raise ValueError(f"Unsupported fixture type: {path.name}")


def run_replay(config_obj: ReplayConfig) -> Dict[str, Any]:
    validate_runtime_config("replay")
    _scraper_event(
        "replay",
        phase="start",
        fixture=str(config_obj.fixture_path),
        date=config_obj.date,
        court=config_obj.court,
    )

    entries = parse_fixture(config_obj)
    log_line(f"[REPLAY] {config_obj.fixture_path} yielded {len(entries)} entries")

    _scraper_event("replay", phase="end", fixture=str(config_obj.fixture_path), entries=len(entries))
    return {
        "fixture": str(config_obj.fixture_path),
        "date": config_obj.date,
        "count": len(entries),
        "data": [entry.to_dict() for entry in entries],
    }


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Replay a saved cause list capture offline.")
    parser.add_argument("fixture", help="Path to a saved .html, .pdf, .txt or .json capture")
    parser.add_argument("--date", required=True, help="Cause list date (YYYY-MM-DD)")
    parser.add_argument("--court", default=None)
    args = parser.parse_args()

    cfg = ReplayConfig(fixture_path=Path(args.fixture), date=args.date, court=args.court)
    print(json.dumps(run_replay(cfg), ensure_ascii=False, indent=2))
