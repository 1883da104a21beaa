"""Recognition of Indian court case numbers inside free text.

Handles the shapes that appear in the registry's tables and PDFs::

    W.P.No.12345 of 2023      -> W.P 12345/2023
    Crl.O.P No. 123 of 2025   -> Crl.O.P 123/2025
    CMA (SR) 789/2023         -> CMA (SR) 789/2023
    WP/12345/2023             -> WP 12345/2023
"""
from __future__ import annotations

import re
from typing import Optional

# Abbreviated case type (with optional "(SR)"-style qualifier), optional
# "No.", the number, then "of" or "/" and a 2-4 digit year.
CASE_NUMBER_PATTERN = re.compile(
    r"(?:(?:Crl\.?)?(?:O\.?P\.?|A\.?|W\.?P\.?|S\.?A\.?|C\.?M\.?A\.?|W\.?A\.?|[A-Z]{1,5})"
    r"(?:\s*\([^)]+\))?)"
    r"\s*(?:No\.?)?\s*(?P<number>\d+)\s*(?:of|/)\s*(?P<year>\d{2,4})",
    re.IGNORECASE,
)

# Strict TYPE/NUMBER/YEAR.
SIMPLE_PATTERN = re.compile(
    r"(?P<type>[A-Z]+)/(?P<number>\d+)/(?P<year>\d{2,4})",
    re.IGNORECASE,
)

_TYPE_TAIL = re.compile(r"\s*(?:No\.?\s*|/)?\d", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


def _search(text: str) -> Optional[re.Match]:
    return CASE_NUMBER_PATTERN.search(text) or SIMPLE_PATTERN.search(text)


def extract(text: str) -> Optional[str]:
    """Return the canonical ``"<type> <number>/<year>"`` found in ``text``."""

    if not text:
        return None

    match = _search(text)
    if match is None:
        return None

    case_type = _TYPE_TAIL.split(match.group(0), maxsplit=1)[0].strip().rstrip(".").strip()
    canonical = f"{case_type} {match.group('number')}/{match.group('year')}"
    return _WHITESPACE.sub(" ", canonical).strip()


def is_valid(text: str) -> bool:
    return bool(text) and _search(text) is not None


def extract_all(text: str) -> list[str]:
    """Return one canonical case number per line of ``text`` that has one."""

    results: list[str] = []
    for line in (text or "").split("\n"):
        extracted = extract(line)
        if extracted:
            results.append(extracted)
    return results


__all__ = ["extract", "is_valid", "extract_all", "CASE_NUMBER_PATTERN", "SIMPLE_PATTERN"]
