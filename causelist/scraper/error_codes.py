from __future__ import annotations

"""Centralised error code taxonomy for cause list acquisition failures.

Codes are carried on raised errors and included in structured logs so that a
caller can tell "try later" apart from "this date has no data".
"""


class ErrorCode:
    NETWORK = "network_error"
    HTTP_4XX = "http_4xx"
    HTTP_404 = "http_404_not_found"
    HTTP_5XX = "http_5xx"
    NAV_TIMEOUT = "navigation_timeout"
    DATE_NOT_AVAILABLE = "date_not_available"
    SITE_STRUCTURE = "site_structure_changed"
    MALFORMED_PDF = "malformed_pdf"
    MALFORMED_FEED = "malformed_feed"
    BROWSER_LAUNCH = "browser_launch_failed"
    CIRCUIT_OPEN = "circuit_open"
    INTERNAL = "internal_error"


def classify_http_status(status: int | None) -> str:
    """Map an HTTP status to an :class:`ErrorCode` value."""

    if status is None:
        return ErrorCode.INTERNAL
    if status == 404:
        return ErrorCode.HTTP_404
    if 400 <= status < 500:
        return ErrorCode.HTTP_4XX
    if status >= 500:
        return ErrorCode.HTTP_5XX
    return ErrorCode.INTERNAL


__all__ = ["ErrorCode", "classify_http_status"]
