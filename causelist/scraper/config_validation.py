from __future__ import annotations

from typing import Literal

from . import config, sources
from .logging_utils import _scraper_event
from .utils import log_line

Entrypoint = Literal["cli", "service", "replay", "tests"]


def _raise_config_error(message: str, *, entrypoint: Entrypoint, error: str) -> None:
    _scraper_event(
        "error",
        phase="config",
        context="runtime_validation",
        error=error,
        entrypoint=entrypoint,
    )
    log_line(f"[CONFIG] {message} (entrypoint={entrypoint})")
    raise ValueError(message)


def validate_runtime_config(entrypoint: Entrypoint) -> None:
    """Validate runtime configuration for the given entrypoint.

    Raises ``ValueError`` when a blocking misconfiguration is detected.
    A non-positive attempt budget is clamped to one attempt and logged.
    """

    if config.SCRAPER_MAX_ATTEMPTS < 1:
        adjusted = 1
        _scraper_event(
            "state",
            phase="config",
            context="runtime_validation",
            kind="config_adjustment",
            field="SCRAPER_MAX_ATTEMPTS",
            value=config.SCRAPER_MAX_ATTEMPTS,
            adjusted=adjusted,
            entrypoint=entrypoint,
        )
        log_line("[CONFIG] SCRAPER_MAX_ATTEMPTS < 1; clamping to 1.")
        config.SCRAPER_MAX_ATTEMPTS = adjusted

    if config.CIRCUIT_BREAKER_THRESHOLD < 1:
        _raise_config_error(
            "CIRCUIT_BREAKER_THRESHOLD must be at least 1.",
            entrypoint=entrypoint,
            error="circuit_breaker_threshold_invalid",
        )

    if config.MAX_BACKOFF_SECONDS < 0:
        _raise_config_error(
            "MAX_BACKOFF_SECONDS must be non-negative.",
            entrypoint=entrypoint,
            error="max_backoff_invalid",
        )

    if not sources.is_known_source(config.DEFAULT_ACQUISITION):
        _raise_config_error(
            f"Unknown acquisition path {config.DEFAULT_ACQUISITION!r}; expected one of {', '.join(sources.ALL_SOURCES)}.",
            entrypoint=entrypoint,
            error="unknown_acquisition",
        )

    timeout_fields = [
        ("PLAYWRIGHT_NAV_TIMEOUT_SECONDS", config.PLAYWRIGHT_NAV_TIMEOUT_SECONDS),
        ("PLAYWRIGHT_SELECTOR_TIMEOUT_SECONDS", config.PLAYWRIGHT_SELECTOR_TIMEOUT_SECONDS),
        ("PLAYWRIGHT_DOWNLOAD_TIMEOUT_SECONDS", config.PLAYWRIGHT_DOWNLOAD_TIMEOUT_SECONDS),
        ("BROWSER_LAUNCH_WAIT_SECONDS", config.BROWSER_LAUNCH_WAIT_SECONDS),
        ("FEED_TIMEOUT_SECONDS", config.FEED_TIMEOUT_SECONDS),
    ]

    for field_name, value in timeout_fields:
        if value <= 0:
            _raise_config_error(
                f"{field_name} must be greater than zero.",
                entrypoint=entrypoint,
                error="invalid_timeout",
            )


__all__ = ["validate_runtime_config", "Entrypoint"]
