from __future__ import annotations

"""Acquisition paths for cause list data.

``feed`` reads the registry's per-date JSON resource directly; ``browser``
drives the public site with Playwright and extracts HTML tables or the court
PDF. Both produce the same canonical records.
"""

import logging

LOGGER = logging.getLogger("causelist")

FEED = "feed"
BROWSER = "browser"

DEFAULT_SOURCE = FEED

ALL_SOURCES = (FEED, BROWSER)

_FEED_ALIASES = {"feed", "json", "api", "direct"}
_BROWSER_ALIASES = {"browser", "playwright", "html", "pdf", "site"}


def normalize_source(value: str | None) -> str:
    """Return a canonical acquisition path identifier.

    Unknown or empty values fall back to ``DEFAULT_SOURCE``.
    """

    if not value:
        return DEFAULT_SOURCE

    raw = value.strip().lower()
    if raw in _FEED_ALIASES:
        return FEED
    if raw in _BROWSER_ALIASES:
        return BROWSER

    return DEFAULT_SOURCE


def is_known_source(value: str | None) -> bool:
    raw = (value or "").strip().lower()
    return raw in _FEED_ALIASES or raw in _BROWSER_ALIASES


def coerce_source(raw: str | None) -> str:
    """Normalise a raw source value, warning when it is not recognised."""

    if not raw:
        return DEFAULT_SOURCE

    if not is_known_source(raw):
        LOGGER.warning("[SOURCES][WARN] Unknown source %r; using default.", raw)
    return normalize_source(raw)


__all__ = [
    "FEED",
    "BROWSER",
    "DEFAULT_SOURCE",
    "ALL_SOURCES",
    "normalize_source",
    "is_known_source",
    "coerce_source",
]
