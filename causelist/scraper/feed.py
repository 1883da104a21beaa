"""Direct ingestion of the registry's per-date JSON cause list feed.

The feed is a mapping (or array) of row objects keyed by abbreviated field
names. Each row describes a listed case in a court hall; clubbed or tagged
cases heard alongside it are nested under ``extra`` with ``ex``-prefixed
fields and become independent entries sharing the parent's bench details.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

import requests

from . import config
from .date_utils import to_feed_token
from .error_codes import ErrorCode, classify_http_status
from .errors import FeedError
from .logging_utils import _scraper_event
from .models import UNKNOWN, Advocates, BenchType, CauseListEntry, SourceType
from .utils import clean_text, log_line

JUDGE_FIELDS = ("judge1", "judge2", "judge3", "judge4", "judge5")

HttpGet = Callable[..., Any]


def build_feed_url(date_str: str) -> str:
    return config.FEED_URL_TEMPLATE.format(ddmmyyyy=to_feed_token(date_str))


def _default_http_get(url: str, *, timeout: int) -> requests.Response:
    return requests.get(
        url,
        headers=config.COMMON_HEADERS,
        timeout=timeout,
        verify=config.FEED_VERIFY_TLS,
    )


def fetch_feed(url: str, *, http_get: Optional[HttpGet] = None) -> Optional[Any]:
    """Fetch and decode the feed at ``url``.

    Returns ``None`` when the resource does not exist (HTTP 404); any other
    non-success status, a transport failure or an undecodable body raises
    :class:`FeedError`.
    """

    getter = http_get or _default_http_get
    _scraper_event("feed", phase="fetch", url=url)

    try:
        response = getter(url, timeout=config.FEED_TIMEOUT_SECONDS)
    except (requests.Timeout, requests.ConnectionError) as exc:
        log_line(f"[FEED][ERROR] Download error for {url}: {exc}")
        raise FeedError(ErrorCode.NETWORK, str(exc)) from exc

    status = int(response.status_code)
    if status == 404:
        log_line(f"[FEED][WARN] Feed not found (404): {url}")
        return None
    if status < 200 or status >= 300:
        log_line(f"[FEED][ERROR] HTTP {status} when downloading feed {url}")
        raise FeedError(classify_http_status(status), f"HTTP {status}", http_status=status)

    try:
        payload = response.json()
    except ValueError as exc:
        log_line(f"[FEED][ERROR] Failed to parse feed JSON: {exc}")
        raise FeedError(ErrorCode.MALFORMED_FEED, f"Invalid JSON: {exc}", http_status=status) from exc

    _scraper_event("feed", phase="fetched", url=url, http_status=status)
    return payload


def _text(row: dict[str, Any], key: str) -> str:
    value = row.get(key)
    if value is None:
        return ""
    return clean_text(str(value))


def _case_number(case_type: str, number: str, year: str) -> str:
    tail = f"{number}/{year}" if year else number
    return clean_text(f"{case_type} {tail}")


def court_matches(row_court: str, court_filter: str) -> bool:
    """Return ``True`` when ``row_court`` is ``court_filter`` or extends it.

    Sub-bench suffixes are tolerated: ``"COURT NO. 01 a"`` matches a filter of
    ``"COURT NO. 01"``.
    """

    row_court = (row_court or "").strip()
    court_filter = (court_filter or "").strip()
    return row_court == court_filter or row_court.startswith(court_filter)


def _rows(payload: Any) -> list[dict[str, Any]]:
    if isinstance(payload, dict):
        candidates: Iterable[Any] = payload.values()
    elif isinstance(payload, list):
        candidates = payload
    else:
        return []
    return [row for row in candidates if isinstance(row, dict)]


def _extras(row: dict[str, Any]) -> list[dict[str, Any]]:
    extra = row.get("extra")
    if not extra:
        return []
    items = extra if isinstance(extra, list) else [extra]
    return [item for item in items if isinstance(item, dict)]


def _entries_for_row(row: dict[str, Any], date_str: str, court_filter: str) -> list[CauseListEntry]:
    judges = [_text(row, key) for key in JUDGE_FIELDS]
    judges = [name for name in judges if name]
    judge_name = ", ".join(judges)

    stage = _text(row, "stagename")
    bench_type = BenchType.from_label(stage)
    if bench_type is BenchType.UNKNOWN:
        bench_type = BenchType.from_judge_count(len(judges))

    court_hall = _text(row, "courtno") or court_filter
    item_number = _text(row, "serial_no") or None

    entries: list[CauseListEntry] = []

    case_type = _text(row, "mcasetype")
    number = _case_number(case_type, _text(row, "mcaseno"), _text(row, "mcaseyr"))
    if number:
        entries.append(
            CauseListEntry(
                case_number=number,
                case_type=case_type or UNKNOWN,
                petitioner=_text(row, "pname") or UNKNOWN,
                respondent=_text(row, "rname") or UNKNOWN,
                advocates=Advocates(
                    petitioner_counsel=_text(row, "mpadv"),
                    respondent_counsel=_text(row, "mradv"),
                ),
                bench_type=bench_type,
                judge_name=judge_name,
                court_hall=court_hall,
                cause_list_date=date_str,
                item_number=item_number,
                source_type=SourceType.JSON,
            )
        )
    else:
        log_line(f"[FEED][WARN] Skipping row without case number: serial_no={item_number!r}")

    for extra in _extras(row):
        extra_type = _text(extra, "excasetype")
        if not extra_type:
            continue
        entries.append(
            CauseListEntry(
                case_number=_case_number(
                    extra_type, _text(extra, "excaseno"), _text(extra, "excaseyr")
                ),
                case_type=extra_type,
                petitioner=_text(extra, "expname") or UNKNOWN,
                respondent=_text(extra, "exrname") or UNKNOWN,
                advocates=Advocates(
                    petitioner_counsel=_text(extra, "expadv"),
                    respondent_counsel=_text(extra, "exradv"),
                ),
                bench_type=bench_type,
                judge_name=judge_name,
                court_hall=court_hall,
                cause_list_date=date_str,
                item_number=item_number,
                source_type=SourceType.JSON,
            )
        )

    return entries


def parse_feed(payload: Any, date_str: str, court_filter: str) -> list[CauseListEntry]:
    """Filter ``payload`` rows to ``court_filter`` and expand them into entries."""

    rows = _rows(payload)
    matching = [row for row in rows if court_matches(_text(row, "courtno"), court_filter)]

    log_line(f"[FEED] Filtered {len(matching)} of {len(rows)} rows for {court_filter!r}")
    if not matching and rows:
        available = sorted({_text(row, "courtno") for row in rows})
        log_line(f"[FEED] Available courts: {', '.join(available[:20])}")

    entries: list[CauseListEntry] = []
    for row in matching:
        entries.extend(_entries_for_row(row, date_str, court_filter))
    return entries


def fetch_cause_list(
    date_str: str,
    court: str = config.DEFAULT_COURT,
    *,
    http_get: Optional[HttpGet] = None,
) -> list[CauseListEntry]:
    """Fetch the feed for ``date_str`` and return the entries for ``court``."""

    url = build_feed_url(date_str)
    log_line(f"[FEED] Fetching cause list from {url} for {court}")

    payload = fetch_feed(url, http_get=http_get)
    if payload is None:
        log_line(f"[FEED][WARN] No feed data for date {date_str}")
        return []

    entries = parse_feed(payload, date_str, court)
    log_line(f"[FEED] Parsed {len(entries)} entries for {court}")
    return entries


__all__ = [
    "build_feed_url",
    "fetch_feed",
    "parse_feed",
    "court_matches",
    "fetch_cause_list",
    "JUDGE_FIELDS",
]
