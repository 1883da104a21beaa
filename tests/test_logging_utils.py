from causelist.scraper import config, logging_utils, utils


def test_scraper_event_label_and_phase(monkeypatch):
    events: list[str] = []
    monkeypatch.setattr(logging_utils, "log_line", lambda msg: events.append(msg))

    logging_utils._scraper_event("state", phase="retry_decision", kind="capped")

    assert events
    line = events[-1]
    assert line.startswith("[SCRAPER][STATE]")
    assert "phase='retry_decision'" in line
    assert "kind='capped'" in line


def test_scraper_event_never_raises(monkeypatch):
    def _broken(msg):
        raise OSError("disk full")

    monkeypatch.setattr(logging_utils, "log_line", _broken)

    logging_utils._scraper_event("feed", phase="fetch")


def test_log_line_writes_to_log_file():
    utils.log_line("[TEST] hello")

    assert utils.get_current_log_path() == config.LOG_FILE
    for handler in utils.LOGGER.handlers:
        handler.flush()
    assert "[TEST] hello" in config.LOG_FILE.read_text(encoding="utf-8")


def test_setup_run_logger_rotates_to_timestamped_file():
    path = utils.setup_run_logger()

    assert path.parent == config.LOG_DIR
    assert path.name.startswith("causelist_")
    assert utils.get_current_log_path() == path


def test_scraper_event_omits_unknown_fields(monkeypatch):
    events: list[str] = []
    monkeypatch.setattr(logging_utils, "log_line", lambda msg: events.append(msg))

    logging_utils._scraper_event("error", phase="circuit", failures=3, http_status=None)

    assert events[-1] == "[SCRAPER][ERROR] failures=3, phase='circuit'"
