"""Extraction of cause list entries from the results page HTML tables."""
from __future__ import annotations

import re
from typing import Sequence

from bs4 import BeautifulSoup
from bs4.element import Tag

from . import case_number
from .models import UNKNOWN, CauseListEntry, SourceType, case_type_of
from .parties import split_parties
from .utils import clean_text, log_line

JUDGE_CUE = re.compile(r"justice|hon'?ble", re.IGNORECASE)
HALL_CUE = re.compile(r"hall|court\s*\d+", re.IGNORECASE)


def _cell_texts(row: Tag) -> list[str]:
    return [clean_text(td.get_text(" ")) for td in row.find_all("td")]


def _extract_parties(cells: Sequence[str]) -> tuple[str, str]:
    if len(cells) < 3:
        return UNKNOWN, UNKNOWN

    second, third = cells[1], cells[2]
    split = split_parties(f"{second} {third}")
    if split is not None:
        return split
    return second or UNKNOWN, third or UNKNOWN


def _first_matching(cells: Sequence[str], cue: re.Pattern) -> str:
    for text in cells:
        if cue.search(text):
            return text
    return ""


def parse(html: str, date_str: str) -> list[CauseListEntry]:
    """Parse every table row in ``html`` that carries a case number."""

    soup = BeautifulSoup(html or "", "html5lib")
    entries: list[CauseListEntry] = []

    for table in soup.find_all("table"):
        for row in table.find_all("tr"):
            row_text = clean_text(row.get_text(" "))
            if not row_text:
                continue

            number = case_number.extract(row_text)
            if not number:
                continue

            cells = _cell_texts(row)
            petitioner, respondent = _extract_parties(cells)
            entries.append(
                CauseListEntry(
                    case_number=number,
                    case_type=case_type_of(number),
                    petitioner=petitioner,
                    respondent=respondent,
                    judge_name=_first_matching(cells, JUDGE_CUE),
                    court_hall=_first_matching(cells, HALL_CUE),
                    cause_list_date=date_str,
                    source_type=SourceType.HTML,
                )
            )

    log_line(f"[PARSER][HTML] Extracted {len(entries)} entries")
    return entries


__all__ = ["parse"]
