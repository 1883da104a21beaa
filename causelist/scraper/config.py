"""Configuration constants for the cause list scraper."""
from __future__ import annotations

import os
from pathlib import Path

DATA_DIR: Path = Path(os.getenv("CAUSELIST_DATA_DIR", "/app/data"))
LOG_DIR: Path = DATA_DIR / "logs"
LOG_FILE: Path = LOG_DIR / "latest.log"
DOWNLOAD_DIR: Path = DATA_DIR / "downloads"

LANDING_URL: str = os.getenv(
    "MHC_CAUSE_LIST_URL", "https://www.mhc.tn.gov.in/judis/clists/"
)
LISTING_URL: str = os.getenv(
    "MHC_CAUSE_LIST_BENCH_URL",
    "https://www.mhc.tn.gov.in/judis/clists/clists-madras/index.php",
)
# {ddmmyyyy} is substituted with the requested date, e.g. cause_18102026.xml
FEED_URL_TEMPLATE: str = os.getenv(
    "MHC_CAUSE_LIST_FEED_URL",
    "https://www.mhc.tn.gov.in/judis/clists/clists-madras/api/result.php"
    "?file=cause_{ddmmyyyy}.xml",
)

DEFAULT_COURT: str = os.getenv("CAUSELIST_DEFAULT_COURT", "COURT NO. 01")
DEFAULT_ACQUISITION: str = (
    os.getenv("CAUSELIST_ACQUISITION", "feed").strip().lower() or "feed"
)

SCRAPER_MAX_ATTEMPTS: int = int(os.getenv("CAUSELIST_MAX_ATTEMPTS", "3"))
CIRCUIT_BREAKER_THRESHOLD: int = int(os.getenv("CAUSELIST_CIRCUIT_BREAKER_THRESHOLD", "10"))
MAX_BACKOFF_SECONDS: float = float(os.getenv("CAUSELIST_MAX_BACKOFF_SECONDS", "30"))


def _parse_timeout_seconds(env_var: str, default: int, *, minimum: int = 1) -> int:
    """Parse a timeout value in seconds from the environment with bounds."""

    try:
        value = int(os.getenv(env_var, str(default)))
    except ValueError:
        return default
    return max(minimum, value)


# Playwright timeouts (seconds)
# Navigation timeout for page.goto calls.
PLAYWRIGHT_NAV_TIMEOUT_SECONDS: int = _parse_timeout_seconds(
    "CAUSELIST_NAV_TIMEOUT_SECONDS", 60
)
# Selector waits (date dropdown, result tables).
PLAYWRIGHT_SELECTOR_TIMEOUT_SECONDS: int = _parse_timeout_seconds(
    "CAUSELIST_SELECTOR_TIMEOUT_SECONDS", 10
)
# Waiting for the court PDF download event after clicking its link.
PLAYWRIGHT_DOWNLOAD_TIMEOUT_SECONDS: int = _parse_timeout_seconds(
    "CAUSELIST_DOWNLOAD_TIMEOUT_SECONDS", 20
)
# Upper bound a caller waits for another caller's in-flight browser launch.
BROWSER_LAUNCH_WAIT_SECONDS: int = _parse_timeout_seconds(
    "CAUSELIST_BROWSER_LAUNCH_WAIT_SECONDS", 30
)

BROWSER_HEADLESS: bool = os.getenv("CAUSELIST_HEADLESS", "true").strip().lower() not in {
    "0",
    "false",
}
BROWSER_ARGS: list[str] = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
]

FEED_TIMEOUT_SECONDS: int = _parse_timeout_seconds("CAUSELIST_FEED_TIMEOUT_SECONDS", 30)
# The registry serves the feed with a certificate chain that does not verify.
FEED_VERIFY_TLS: bool = os.getenv("CAUSELIST_FEED_VERIFY_TLS", "0").strip().lower() not in {
    "0",
    "false",
}

UA: str = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

COMMON_HEADERS: dict[str, str] = {
    "User-Agent": UA,
    "Accept": "application/json, */*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Connection": "keep-alive",
}

DISCLAIMER: str = "Unofficial API. For informational use only."


def is_feed_mode(mode: str) -> bool:
    """Return ``True`` when ``mode`` selects the direct JSON feed."""

    return str(mode).strip().lower() == "feed"
