from pathlib import Path

import pytest

from causelist.scraper import config, utils


@pytest.fixture(autouse=True)
def _isolated_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    data_dir = tmp_path / "data"
    monkeypatch.setattr(config, "DATA_DIR", data_dir)
    monkeypatch.setattr(config, "LOG_DIR", data_dir / "logs")
    monkeypatch.setattr(config, "LOG_FILE", data_dir / "logs" / "latest.log")
    monkeypatch.setattr(config, "DOWNLOAD_DIR", data_dir / "downloads")
    monkeypatch.setattr(utils, "_LOGGER_INITIALISED", False)
    return data_dir
