from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string, raising ``ValueError`` otherwise."""

    candidate = (value or "").strip()
    try:
        return datetime.strptime(candidate, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Date must be in YYYY-MM-DD format, got {value!r}") from None


def to_feed_token(value: str) -> str:
    """Return the ``DDMMYYYY`` token used in per-date feed file names."""

    return parse_iso_date(value).strftime("%d%m%Y")


def dropdown_candidates(value: str) -> list[str]:
    """Return the renderings of ``value`` the date dropdown may carry.

    The ISO form comes first; the dropdown has also been seen with
    ``DD-MM-YYYY`` option values.
    """

    parsed = parse_iso_date(value)
    return [parsed.strftime("%Y-%m-%d"), parsed.strftime("%d-%m-%Y")]


def today_iso() -> str:
    return date.today().isoformat()


__all__ = ["parse_iso_date", "to_feed_token", "dropdown_candidates", "today_iso"]
