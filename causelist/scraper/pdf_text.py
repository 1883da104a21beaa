"""Line-oriented parser for text extracted from cause list PDFs.

A judge heading ("Hon'ble Mr. Justice ...") and a court hall heading
("Court Hall : 5") typically precede a block of several cases, so both are
carried forward onto every case opened after them until they are replaced.
Within a case, the first line with a vs/versus separator supplies the parties.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import pdfplumber

from . import case_number
from .models import CauseListEntry, SourceType, case_type_of
from .parties import split_parties
from .utils import log_line

JUDGE_PATTERN = re.compile(r"(Hon'?ble\s+.*?Justice\s+[A-Z\s.]+)", re.IGNORECASE)
COURT_HALL_PATTERN = re.compile(r"(Court\s+Hall\s*:?\s*\d+)|(Hall\s*\d+)", re.IGNORECASE)

STATE_INIT = "init"
STATE_CASE = "case"
STATE_PARTIES = "parties"


@dataclass
class _ParseState:
    judge: str = ""
    hall: str = ""
    tag: str = STATE_INIT
    current: Optional[CauseListEntry] = None
    entries: list[CauseListEntry] = field(default_factory=list)

    def flush(self) -> None:
        if self.current is not None:
            self.entries.append(self.current)
        self.current = None


def _open_entry(state: _ParseState, number: str, date_str: str) -> None:
    state.flush()
    state.current = CauseListEntry(
        case_number=number,
        case_type=case_type_of(number),
        judge_name=state.judge,
        court_hall=state.hall,
        cause_list_date=date_str,
        source_type=SourceType.PDF,
    )
    state.tag = STATE_CASE


def parse(pdf_text: str, date_str: str) -> list[CauseListEntry]:
    """Walk ``pdf_text`` line by line and return the cases found."""

    state = _ParseState()
    lines = [line.strip() for line in (pdf_text or "").split("\n")]

    for line in lines:
        if not line:
            continue

        judge_match = JUDGE_PATTERN.search(line)
        if judge_match:
            state.judge = judge_match.group(1).strip()
            continue

        hall_match = COURT_HALL_PATTERN.search(line)
        if hall_match:
            state.hall = hall_match.group(0).strip()
            continue

        number = case_number.extract(line)
        if number:
            _open_entry(state, number, date_str)
            continue

        if state.current is not None and state.tag == STATE_CASE:
            parties = split_parties(line)
            if parties is not None:
                state.current.petitioner, state.current.respondent = parties
                state.tag = STATE_PARTIES

    state.flush()
    log_line(f"[PARSER][PDF] Extracted {len(state.entries)} entries")
    return state.entries


def extract_text(pdf_path: Path) -> str:
    """Return the text of every page of ``pdf_path`` joined by newlines."""

    pages: list[str] = []
    with pdfplumber.open(str(pdf_path)) as pdf:
        for page in pdf.pages:
            text = page.extract_text()
            if text:
                pages.append(text)
    return "\n".join(pages)


__all__ = ["parse", "extract_text", "JUDGE_PATTERN", "COURT_HALL_PATTERN"]
