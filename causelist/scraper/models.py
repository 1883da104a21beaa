"""Canonical cause list record shared by every extraction path."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

UNKNOWN = "Unknown"

_CASE_TYPE_PREFIX = re.compile(r"^([A-Z\s.()]+)", re.IGNORECASE)


class BenchType(str, Enum):
    SINGLE = "Single"
    DIVISION = "Division"
    FULL = "Full"
    UNKNOWN = "Unknown"

    @classmethod
    def from_label(cls, label: str | None) -> "BenchType":
        """Map a free-text stage/bench label onto a bench type."""

        text = (label or "").lower()
        if "full" in text:
            return cls.FULL
        if "division" in text:
            return cls.DIVISION
        if "single" in text:
            return cls.SINGLE
        return cls.UNKNOWN

    @classmethod
    def from_judge_count(cls, count: int) -> "BenchType":
        if count <= 0:
            return cls.UNKNOWN
        if count == 1:
            return cls.SINGLE
        if count == 2:
            return cls.DIVISION
        return cls.FULL


class SourceType(str, Enum):
    HTML = "HTML"
    PDF = "PDF"
    JSON = "JSON"


@dataclass
class Advocates:
    petitioner_counsel: str = ""
    respondent_counsel: str = ""


@dataclass
class CauseListEntry:
    case_number: str
    case_type: str
    cause_list_date: str
    source_type: SourceType
    petitioner: str = UNKNOWN
    respondent: str = UNKNOWN
    advocates: Advocates = field(default_factory=Advocates)
    bench_type: BenchType = BenchType.UNKNOWN
    judge_name: str = ""
    court_hall: str = ""
    item_number: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "case_number": self.case_number,
            "case_type": self.case_type,
            "petitioner": self.petitioner,
            "respondent": self.respondent,
            "advocates": {
                "petitioner_counsel": self.advocates.petitioner_counsel,
                "respondent_counsel": self.advocates.respondent_counsel,
            },
            "bench_type": self.bench_type.value,
            "judge_name": self.judge_name,
            "court_hall": self.court_hall,
            "cause_list_date": self.cause_list_date,
            "source_type": self.source_type.value,
        }
        if self.item_number is not None:
            payload["item_number"] = self.item_number
        return payload


def case_type_of(case_number: str) -> str:
    """Return the leading case-type portion of a canonical case number."""

    match = _CASE_TYPE_PREFIX.match(case_number or "")
    if not match:
        return UNKNOWN
    return match.group(1).strip() or UNKNOWN


__all__ = [
    "UNKNOWN",
    "BenchType",
    "SourceType",
    "Advocates",
    "CauseListEntry",
    "case_type_of",
]
