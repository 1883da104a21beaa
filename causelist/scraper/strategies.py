"""Extraction strategies tried against the cause list results page.

Each strategy pairs a capability check with a runner. The orchestrator walks
``DEFAULT_STRATEGIES`` in order: HTML tables first, then the court PDF.
Runners never raise for malformed content; they log and return an empty list
so the next strategy still gets its turn.
"""
from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, Optional

from playwright.async_api import Download, Error as PWError, Page

from . import config, html_table, pdf_text
from .error_codes import ErrorCode
from .logging_utils import _scraper_event
from .models import CauseListEntry
from .selectors import CAUSE_LIST_SELECTORS, CauseListSelectors
from .utils import log_line, remove_file


class StrategyKind(str, Enum):
    HTML = "HTML"
    PDF = "PDF"


CanHandle = Callable[[Page], Awaitable[bool]]
Runner = Callable[[Page, str, Optional[str]], Awaitable[list[CauseListEntry]]]


@dataclass(frozen=True)
class Strategy:
    kind: StrategyKind
    can_handle: CanHandle
    run: Runner

    @property
    def name(self) -> str:
        return self.kind.value


# ---------------------------------------------------------------------------
# HTML tables
# ---------------------------------------------------------------------------


async def html_can_handle(page: Page, selectors: CauseListSelectors = CAUSE_LIST_SELECTORS) -> bool:
    try:
        return await page.locator(selectors.result_table).count() > 0
    except PWError as exc:
        log_line(f"[STRATEGY][HTML] Table check failed: {exc}")
        return False


async def html_run(
    page: Page,
    date_str: str,
    court: Optional[str] = None,
    selectors: CauseListSelectors = CAUSE_LIST_SELECTORS,
) -> list[CauseListEntry]:
    log_line("[STRATEGY][HTML] Starting HTML parsing...")
    try:
        await page.wait_for_selector(
            selectors.result_table,
            timeout=config.PLAYWRIGHT_SELECTOR_TIMEOUT_SECONDS * 1000,
        )
        html = await page.content()
        entries = html_table.parse(html, date_str)
    except Exception as exc:  # noqa: BLE001
        log_line(f"[STRATEGY][HTML] Parsing failed: {exc}")
        _scraper_event(
            "error",
            phase="strategy",
            strategy=StrategyKind.HTML.value,
            error_code=ErrorCode.SITE_STRUCTURE,
            error=str(exc),
        )
        return []

    if not entries:
        log_line("[STRATEGY][HTML] No entries found in HTML tables")
    return entries


# ---------------------------------------------------------------------------
# Court PDF
# ---------------------------------------------------------------------------


async def pdf_can_handle(page: Page, selectors: CauseListSelectors = CAUSE_LIST_SELECTORS) -> bool:
    try:
        return await page.get_by_text(selectors.court_link_text, exact=False).count() > 0
    except PWError as exc:
        log_line(f"[STRATEGY][PDF] Court link check failed: {exc}")
        return False


def _download_name(date_str: str, suggested: str | None) -> str:
    # Unique per request; concurrent scrapes share DOWNLOAD_DIR.
    stem = Path(suggested or "court").stem or "court"
    return f"causelist_{date_str}_{uuid.uuid4().hex[:8]}_{stem}.pdf"


async def download_court_pdf(
    page: Page,
    court: Optional[str] = None,
    selectors: CauseListSelectors = CAUSE_LIST_SELECTORS,
) -> Optional[Download]:
    """Click the first court link that yields a download and return it."""

    for selector in selectors.court_link_selectors(court):
        element = page.locator(selector).first
        if await element.count() == 0:
            continue

        log_line(f"[STRATEGY][PDF] Trying court PDF link: {selector}")
        try:
            async with page.expect_download(
                timeout=config.PLAYWRIGHT_DOWNLOAD_TIMEOUT_SECONDS * 1000
            ) as download_info:
                await element.click()
            return await download_info.value
        except PWError as exc:
            log_line(f"[STRATEGY][PDF] Selector failed: {selector}: {exc}")
            continue

    return None


async def pdf_run(
    page: Page,
    date_str: str,
    court: Optional[str] = None,
    selectors: CauseListSelectors = CAUSE_LIST_SELECTORS,
) -> list[CauseListEntry]:
    log_line("[STRATEGY][PDF] Looking for court-specific PDFs...")
    download: Optional[Download] = None
    pdf_path: Optional[Path] = None
    try:
        download = await download_court_pdf(page, court, selectors)
        if download is None:
            log_line("[STRATEGY][PDF] Could not download court PDF")
            return []

        config.DOWNLOAD_DIR.mkdir(parents=True, exist_ok=True)
        pdf_path = config.DOWNLOAD_DIR / _download_name(date_str, download.suggested_filename)
        await download.save_as(pdf_path)
        log_line(f"[STRATEGY][PDF] Downloaded court PDF to: {pdf_path}")

        text = await asyncio.to_thread(pdf_text.extract_text, pdf_path)
        entries = pdf_text.parse(text, date_str)
        log_line(f"[STRATEGY][PDF] Parsed {len(entries)} entries from court PDF")
        return entries
    except Exception as exc:  # noqa: BLE001
        log_line(f"[STRATEGY][PDF] Court PDF parsing failed: {exc}")
        _scraper_event(
            "error",
            phase="strategy",
            strategy=StrategyKind.PDF.value,
            error_code=ErrorCode.MALFORMED_PDF,
            error=str(exc),
        )
        return []
    finally:
        if pdf_path is not None:
            remove_file(pdf_path)
        if download is not None:
            try:
                await download.delete()
            except PWError as exc:
                log_line(f"[STRATEGY][PDF] Could not delete browser download: {exc}")


HTML_STRATEGY = Strategy(StrategyKind.HTML, html_can_handle, html_run)
PDF_STRATEGY = Strategy(StrategyKind.PDF, pdf_can_handle, pdf_run)

# Order matters: tables are cheaper and more reliable than the PDF.
DEFAULT_STRATEGIES: tuple[Strategy, ...] = (HTML_STRATEGY, PDF_STRATEGY)

__all__ = [
    "StrategyKind",
    "Strategy",
    "HTML_STRATEGY",
    "PDF_STRATEGY",
    "DEFAULT_STRATEGIES",
    "html_can_handle",
    "html_run",
    "pdf_can_handle",
    "pdf_run",
    "download_court_pdf",
]
