import pytest
import requests

from causelist.scraper import feed
from causelist.scraper.error_codes import ErrorCode
from causelist.scraper.errors import FeedError
from causelist.scraper.models import UNKNOWN, BenchType, SourceType

DATE = "2026-10-19"


def _row(courtno: str, **overrides):
    row = {
        "courtno": courtno,
        "mcasetype": "WP",
        "mcaseno": "100",
        "mcaseyr": "2024",
        "pname": "John Doe",
        "rname": "State of Tamil Nadu",
        "mpadv": "M/s. A. Counsel",
        "mradv": "Government Pleader",
        "judge1": "HON'BLE THE CHIEF JUSTICE",
        "judge2": "HON'BLE MR. JUSTICE B. KUMAR",
        "stagename": "FOR ADMISSION",
        "serial_no": 5,
    }
    row.update(overrides)
    return row


class _FakeResponse:
    def __init__(self, status_code: int, payload=None, *, bad_json: bool = False):
        self.status_code = status_code
        self._payload = payload
        self._bad_json = bad_json

    def json(self):
        if self._bad_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


def test_build_feed_url_uses_day_month_year_token() -> None:
    assert "cause_19102026" in feed.build_feed_url(DATE)


@pytest.mark.parametrize(
    "row_court, court_filter, expected",
    [
        ("COURT NO. 01", "COURT NO. 01", True),
        ("COURT NO. 01 a", "COURT NO. 01", True),
        ("COURT NO. 11 a", "COURT NO. 01", False),
        ("COURT NO. 02", "COURT NO. 01", False),
    ],
)
def test_court_matches(row_court: str, court_filter: str, expected: bool) -> None:
    assert feed.court_matches(row_court, court_filter) is expected


def test_parse_feed_filters_rows_by_court() -> None:
    payload = {
        "0": _row("COURT NO. 01 a"),
        "1": _row("COURT NO. 11 a", mcaseno="200"),
    }

    entries = feed.parse_feed(payload, DATE, "COURT NO. 01")

    assert [entry.case_number for entry in entries] == ["WP 100/2024"]
    entry = entries[0]
    assert entry.source_type is SourceType.JSON
    assert entry.petitioner == "John Doe"
    assert entry.advocates.petitioner_counsel == "M/s. A. Counsel"
    assert entry.advocates.respondent_counsel == "Government Pleader"
    assert entry.judge_name == "HON'BLE THE CHIEF JUSTICE, HON'BLE MR. JUSTICE B. KUMAR"
    assert entry.bench_type is BenchType.DIVISION
    assert entry.court_hall == "COURT NO. 01 a"
    assert entry.item_number == "5"


def test_parse_feed_expands_extra_records() -> None:
    row = _row(
        "COURT NO. 01",
        extra=[
            {"excasetype": "WMP", "excaseno": "1", "excaseyr": "2024", "expname": "John Doe"},
            {"excasetype": "WMP", "excaseno": "2", "excaseyr": "2024", "exrname": "Registrar"},
        ],
    )

    entries = feed.parse_feed([row], DATE, "COURT NO. 01")

    assert [entry.case_number for entry in entries] == ["WP 100/2024", "WMP 1/2024", "WMP 2/2024"]
    assert len({entry.judge_name for entry in entries}) == 1
    assert len({entry.court_hall for entry in entries}) == 1
    assert len({entry.bench_type for entry in entries}) == 1
    assert entries[1].respondent == UNKNOWN
    assert entries[2].petitioner == UNKNOWN
    assert entries[2].respondent == "Registrar"


def test_parse_feed_accepts_single_extra_object() -> None:
    row = _row("COURT NO. 01", extra={"excasetype": "CMP", "excaseno": "9", "excaseyr": "2025"})

    entries = feed.parse_feed({"0": row}, DATE, "COURT NO. 01")

    assert [entry.case_number for entry in entries] == ["WP 100/2024", "CMP 9/2025"]


def test_parse_feed_missing_optional_fields_degrade() -> None:
    row = {"courtno": "COURT NO. 01", "mcasetype": "SA", "mcaseno": "7", "mcaseyr": "2025"}

    [entry] = feed.parse_feed({"0": row}, DATE, "COURT NO. 01")

    assert entry.petitioner == UNKNOWN
    assert entry.respondent == UNKNOWN
    assert entry.judge_name == ""
    assert entry.bench_type is BenchType.UNKNOWN
    assert entry.advocates.petitioner_counsel == ""
    assert entry.item_number is None


def test_parse_feed_bench_from_stage_label() -> None:
    row = _row("COURT NO. 01", judge2=None, stagename="DIVISION BENCH")

    [entry] = feed.parse_feed({"0": row}, DATE, "COURT NO. 01")

    assert entry.bench_type is BenchType.DIVISION


def test_parse_feed_ignores_non_row_values() -> None:
    assert feed.parse_feed({"meta": "x", "count": 3}, DATE, "COURT NO. 01") == []
    assert feed.parse_feed("not a payload", DATE, "COURT NO. 01") == []


def test_fetch_feed_not_found_returns_none() -> None:
    assert feed.fetch_feed("https://feed.example", http_get=lambda url, timeout: _FakeResponse(404)) is None


def test_fetch_feed_server_error_raises() -> None:
    with pytest.raises(FeedError) as exc_info:
        feed.fetch_feed("https://feed.example", http_get=lambda url, timeout: _FakeResponse(503))

    assert exc_info.value.error_code == ErrorCode.HTTP_5XX
    assert exc_info.value.http_status == 503


def test_fetch_feed_network_error_raises() -> None:
    def _boom(url, timeout):
        raise requests.ConnectionError("connection refused")

    with pytest.raises(FeedError) as exc_info:
        feed.fetch_feed("https://feed.example", http_get=_boom)

    assert exc_info.value.error_code == ErrorCode.NETWORK


def test_fetch_feed_invalid_json_raises() -> None:
    with pytest.raises(FeedError) as exc_info:
        feed.fetch_feed(
            "https://feed.example",
            http_get=lambda url, timeout: _FakeResponse(200, bad_json=True),
        )

    assert exc_info.value.error_code == ErrorCode.MALFORMED_FEED


def test_fetch_cause_list_end_to_end() -> None:
    requested: list[str] = []

    def _fake_get(url, timeout):
        requested.append(url)
        return _FakeResponse(200, {"0": _row("COURT NO. 01")})

    entries = feed.fetch_cause_list(DATE, "COURT NO. 01", http_get=_fake_get)

    assert len(entries) == 1
    assert "cause_19102026" in requested[0]


def test_fetch_cause_list_missing_feed_is_empty() -> None:
    assert feed.fetch_cause_list(DATE, http_get=lambda url, timeout: _FakeResponse(404)) == []
