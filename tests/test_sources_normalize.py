from causelist.scraper import sources


def test_normalize_source_defaults_and_aliases() -> None:
    assert sources.normalize_source(None) == sources.FEED
    assert sources.normalize_source("") == sources.FEED
    assert sources.normalize_source("json") == sources.FEED
    assert sources.normalize_source(" API ") == sources.FEED
    assert sources.normalize_source("playwright") == sources.BROWSER
    assert sources.normalize_source("pdf") == sources.BROWSER
    assert sources.normalize_source("unknown") == sources.DEFAULT_SOURCE


def test_coerce_source_falls_back_on_unknown() -> None:
    assert sources.is_known_source("fax") is False
    assert sources.coerce_source("fax") == sources.DEFAULT_SOURCE
    assert sources.coerce_source(None) == sources.DEFAULT_SOURCE
    assert sources.coerce_source("browser") == sources.BROWSER
