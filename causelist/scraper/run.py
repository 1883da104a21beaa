"""Command line entry point for a single cause list scrape.

Example::

    python -m causelist.scraper.run --date 2026-10-19 --court "COURT NO. 01" --source feed
"""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import config, sources
from .config_validation import validate_runtime_config
from .date_utils import today_iso
from .errors import CauseListError
from .logging_utils import _scraper_event
from .service import CauseListService
from .utils import ensure_dirs, log_line, save_json_file, setup_run_logger


def build_envelope(date_str: str, court: str, source: str, entries: List[Any]) -> Dict[str, Any]:
    return {
        "date": date_str,
        "court": court,
        "source": source,
        "count": len(entries),
        "data": [entry.to_dict() for entry in entries],
        "disclaimer": config.DISCLAIMER,
    }


async def run_scrape(
    date_str: str,
    court: str,
    source: str,
    *,
    service: Optional[CauseListService] = None,
) -> Dict[str, Any]:
    """Run one scrape and return the response envelope."""

    service = service or CauseListService()
    try:
        entries = await service.scrape_daily_cause_list(date_str, court, source=source)
    finally:
        await service.shutdown()
    return build_envelope(date_str, court, source, entries)


def _cli_entrypoint(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Scrape a daily cause list")
    parser.add_argument("--date", default=None, help="Cause list date (YYYY-MM-DD); defaults to today")
    parser.add_argument("--court", default=config.DEFAULT_COURT)
    parser.add_argument(
        "--source",
        default=None,
        help=(
            "Acquisition path: 'feed' (JSON feed) or 'browser' (Playwright). "
            "Unknown values fall back to the default with a warning."
        ),
    )
    parser.add_argument("--output", default=None, help="Write the JSON envelope to this path")
    args = parser.parse_args(argv)

    ensure_dirs()
    setup_run_logger()
    validate_runtime_config("cli")

    date_str = args.date or today_iso()
    source = sources.coerce_source(args.source or config.DEFAULT_ACQUISITION)

    try:
        envelope = asyncio.run(run_scrape(date_str, args.court, source))
    except (CauseListError, ValueError) as exc:
        error_code = getattr(exc, "error_code", "invalid_input")
        log_line(f"[RUN][ERROR] {error_code}: {exc}")
        _scraper_event("error", phase="run", error_code=error_code, error=str(exc))
        return 1

    if args.output:
        save_json_file(Path(args.output), envelope)
        log_line(f"[RUN] Wrote {envelope['count']} entries to {args.output}")
    else:
        print(json.dumps(envelope, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(_cli_entrypoint())

__all__ = ["run_scrape", "build_envelope", "_cli_entrypoint"]
