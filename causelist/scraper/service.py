"""Engine boundary consumed by outer layers (HTTP, cache, cron).

``CauseListService`` owns the shared browser session and the orchestrator and
routes each request to the configured acquisition path. Both paths run under
the orchestrator's circuit breaker and retry policy.
"""
from __future__ import annotations

import asyncio
from typing import Callable, Optional

from . import config, feed, sources
from .browser import SessionManager
from .date_utils import parse_iso_date
from .errors import DateNotAvailableError
from .logging_utils import _scraper_event
from .models import CauseListEntry
from .orchestrator import Orchestrator
from .utils import log_line

FeedFetcher = Callable[[str, str], list[CauseListEntry]]


class CauseListService:
    def __init__(
        self,
        *,
        session_manager: Optional[SessionManager] = None,
        orchestrator: Optional[Orchestrator] = None,
        acquisition: Optional[str] = None,
        feed_fetcher: Optional[FeedFetcher] = None,
    ) -> None:
        self.session_manager = session_manager or SessionManager()
        self.orchestrator = orchestrator or Orchestrator()
        self.acquisition = sources.coerce_source(acquisition or config.DEFAULT_ACQUISITION)
        self._feed_fetcher: FeedFetcher = feed_fetcher or feed.fetch_cause_list

    async def scrape_daily_cause_list(
        self,
        date_str: str,
        court: Optional[str] = None,
        *,
        source: Optional[str] = None,
    ) -> list[CauseListEntry]:
        """Return the cause list entries for ``date_str`` and ``court``.

        An empty list means no list is published for that date/court. Raises
        ``ValueError`` for a malformed date, :class:`CircuitOpenError` while the
        breaker is open and :class:`ScrapeFailedError` once retries are spent.
        """

        parse_iso_date(date_str)
        court = (court or "").strip() or config.DEFAULT_COURT
        path = sources.coerce_source(source) if source else self.acquisition

        log_line(f"[SERVICE] Scraping cause list date={date_str} court={court!r} source={path}")
        _scraper_event("service", phase="start", date=date_str, court=court, source=path)

        try:
            if config.is_feed_mode(path):
                entries = await self.orchestrator.run_guarded(
                    lambda: asyncio.to_thread(self._feed_fetcher, date_str, court),
                    label="feed",
                )
            else:
                entries = await self.orchestrator.run_guarded(
                    lambda: self._browser_attempt(date_str, court),
                    label="browser",
                )
        except DateNotAvailableError as exc:
            log_line(f"[SERVICE] No cause list published for {exc.date}")
            _scraper_event("service", phase="end", date=date_str, source=path, entries=0, reason=exc.error_code)
            return []

        _scraper_event("service", phase="end", date=date_str, source=path, entries=len(entries))
        return entries

    async def _browser_attempt(self, date_str: str, court: str) -> list[CauseListEntry]:
        # Context acquisition, including any browser launch, is part of the attempt.
        async with self.session_manager.context() as ctx:
            return await self.orchestrator.run_once(ctx, date_str, court)

    def reset_circuit_breaker(self) -> None:
        self.orchestrator.reset_circuit_breaker()

    async def shutdown(self) -> None:
        await self.session_manager.shutdown()


__all__ = ["CauseListService"]
