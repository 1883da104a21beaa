import json
from pathlib import Path

import pytest

from causelist.scraper import config, run, sources
from causelist.scraper.errors import CircuitOpenError
from causelist.scraper.models import CauseListEntry, SourceType


class _FakeService:
    instances: list["_FakeService"] = []

    def __init__(self, outcome=None):
        self.outcome = outcome if outcome is not None else []
        self.calls: list[tuple] = []
        self.shutdowns = 0
        _FakeService.instances.append(self)

    async def scrape_daily_cause_list(self, date_str, court=None, *, source=None):
        self.calls.append((date_str, court, source))
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome

    async def shutdown(self):
        self.shutdowns += 1


@pytest.fixture
def fake_service(monkeypatch: pytest.MonkeyPatch):
    _FakeService.instances = []
    entries = [CauseListEntry("SA 1/2024", "SA", "2026-10-19", SourceType.JSON)]
    monkeypatch.setattr(run, "CauseListService", lambda: _FakeService(entries))
    return _FakeService


def test_cli_writes_envelope(fake_service, tmp_path: Path) -> None:
    output = tmp_path / "out.json"

    code = run._cli_entrypoint(
        ["--date", "2026-10-19", "--court", "COURT NO. 02", "--source", "json", "--output", str(output)]
    )

    assert code == 0
    envelope = json.loads(output.read_text(encoding="utf-8"))
    assert envelope["date"] == "2026-10-19"
    assert envelope["court"] == "COURT NO. 02"
    assert envelope["source"] == sources.FEED
    assert envelope["count"] == 1
    assert envelope["data"][0]["case_number"] == "SA 1/2024"
    assert envelope["disclaimer"] == config.DISCLAIMER
    [service] = fake_service.instances
    assert service.calls == [("2026-10-19", "COURT NO. 02", sources.FEED)]
    assert service.shutdowns == 1


def test_cli_defaults_to_today(fake_service, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setattr(run, "today_iso", lambda: "2026-10-18")

    assert run._cli_entrypoint([]) == 0

    [service] = fake_service.instances
    assert service.calls[0][0] == "2026-10-18"
    assert service.calls[0][1] == config.DEFAULT_COURT
    assert '"date": "2026-10-18"' in capsys.readouterr().out


def test_cli_reports_typed_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    _FakeService.instances = []
    monkeypatch.setattr(run, "CauseListService", lambda: _FakeService(CircuitOpenError(10)))

    assert run._cli_entrypoint(["--date", "2026-10-19"]) == 1
    assert _FakeService.instances[0].shutdowns == 1
