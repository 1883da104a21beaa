from __future__ import annotations

"""Selectors for the Madras bench cause list pages."""

import re
from dataclasses import dataclass
from typing import Tuple

_COURT_NUMBER = re.compile(r"(\d+)")


@dataclass(frozen=True)
class CauseListSelectors:
    """Selector hints for the daily cause list flow.

    The listing page offers a "Daily List" radio button that populates a date
    dropdown (``#ct_date``); submitting it leads to a results page with either
    HTML tables or per-court PDF links.
    """

    daily_list_radio: str = 'input[type="radio"][value="1"]'
    date_select: str = "#ct_date"
    date_options: str = "#ct_date option"
    submit_button: str = 'input[name="btn_dailylist"]'
    result_table: str = "table"
    court_link_text: str = "Court"
    court_link_fallbacks: Tuple[str, ...] = (
        'a:has-text("Court 1")',
        'a:has-text("Court No. 1")',
        'a:has-text("Court-1")',
        'a:has-text("Court")',
    )

    def court_link_selectors(self, court: str | None = None) -> list[str]:
        """Return PDF link selectors, most specific to ``court`` first."""

        match = _COURT_NUMBER.search(court or "")
        if not match:
            return list(self.court_link_fallbacks)

        number = str(int(match.group(1)))
        specific = [
            f'a:has-text("Court {number}")',
            f'a:has-text("Court No. {number}")',
            f'a:has-text("Court-{number}")',
        ]
        return specific + [sel for sel in self.court_link_fallbacks if sel not in specific]


CAUSE_LIST_SELECTORS = CauseListSelectors()

__all__ = [
    "CauseListSelectors",
    "CAUSE_LIST_SELECTORS",
]
