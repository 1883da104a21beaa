from __future__ import annotations

"""Structured ``[SCRAPER][LABEL] key=value`` log lines for the cause list engine."""

from typing import Any

from .utils import log_line


def _scraper_event(label: str = "", *, phase: str | None = None, **fields: Any) -> None:
    """Emit a structured scraper log line.

    ``phase`` doubles as the label when no label is given; otherwise it is
    logged as a field. Fields whose value is ``None`` are left out so optional
    context (``http_status``, ``error_code``) only shows up when known.
    """

    try:
        event_label = label or (phase or "")
        if phase and label:
            fields.setdefault("phase", phase)
        payload = ", ".join(
            f"{key}={value!r}" for key, value in sorted(fields.items()) if value is not None
        )
        log_line(f"[SCRAPER][{event_label.upper()}] {payload}")
    except Exception:  # noqa: BLE001
        # Logging must never break a scrape.
        return


__all__ = ["_scraper_event"]
