"""Navigation, date selection and strategy fallback for browser scrapes.

``Orchestrator.run_guarded`` is the failure policy shared by every acquisition
path: a circuit breaker check, then up to ``config.SCRAPER_MAX_ATTEMPTS``
attempts with exponential backoff, then breaker bookkeeping. ``scrape`` runs
the browser flow under that policy.
"""
from __future__ import annotations

import asyncio
import threading
from typing import Awaitable, Callable, Optional, Sequence, TypeVar

from playwright.async_api import BrowserContext, Error as PWError, Page, TimeoutError as PWTimeout

from . import config
from .date_utils import dropdown_candidates
from .error_codes import ErrorCode
from .errors import CauseListError, CircuitOpenError, DateNotAvailableError, ScrapeFailedError
from .logging_utils import _scraper_event
from .models import CauseListEntry
from .retry_policy import NON_RETRYABLE_ERROR_CODES, compute_backoff_seconds, decide_retry
from .selectors import CAUSE_LIST_SELECTORS, CauseListSelectors
from .strategies import DEFAULT_STRATEGIES, Strategy
from .utils import log_line

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


class CircuitBreaker:
    """Consecutive-failure counter shared by all scrapes of one orchestrator."""

    def __init__(self, threshold: int) -> None:
        self.threshold = max(1, threshold)
        self._failures = 0
        self._lock = threading.Lock()

    @property
    def failures(self) -> int:
        with self._lock:
            return self._failures

    def is_open(self) -> bool:
        with self._lock:
            return self._failures >= self.threshold

    def record_failure(self) -> int:
        with self._lock:
            self._failures += 1
            return self._failures

    def record_success(self) -> None:
        with self._lock:
            self._failures = 0

    def reset(self) -> None:
        self.record_success()


def _error_code_for(exc: BaseException) -> str:
    code = getattr(exc, "error_code", None)
    if code:
        return str(code)
    if isinstance(exc, PWTimeout):
        return ErrorCode.NAV_TIMEOUT
    if isinstance(exc, PWError):
        return ErrorCode.NETWORK
    return ErrorCode.INTERNAL


class Orchestrator:
    def __init__(
        self,
        *,
        strategies: Optional[Sequence[Strategy]] = None,
        selectors: CauseListSelectors = CAUSE_LIST_SELECTORS,
        max_attempts: Optional[int] = None,
        breaker: Optional[CircuitBreaker] = None,
        sleep: Optional[Sleep] = None,
    ) -> None:
        self.strategies: tuple[Strategy, ...] = tuple(
            strategies if strategies is not None else DEFAULT_STRATEGIES
        )
        self.selectors = selectors
        self.max_attempts = max(
            1, max_attempts if max_attempts is not None else config.SCRAPER_MAX_ATTEMPTS
        )
        self.breaker = breaker or CircuitBreaker(config.CIRCUIT_BREAKER_THRESHOLD)
        self._sleep: Sleep = sleep or asyncio.sleep

    # ------------------------------------------------------------------
    # Failure policy
    # ------------------------------------------------------------------

    async def run_guarded(self, operation: Callable[[], Awaitable[T]], *, label: str) -> T:
        """Run ``operation`` behind the circuit breaker with retries."""

        if self.breaker.is_open():
            failures = self.breaker.failures
            log_line(f"[ORCHESTRATOR][ERROR] Circuit breaker open after {failures} consecutive failures.")
            _scraper_event("error", phase="circuit", acquisition=label, failures=failures, threshold=self.breaker.threshold)
            raise CircuitOpenError(failures)

        try:
            result = await self._with_retries(operation, label=label)
        except CauseListError as exc:
            if exc.error_code != ErrorCode.DATE_NOT_AVAILABLE:
                failures = self.breaker.record_failure()
                log_line(f"[ORCHESTRATOR][ERROR] {label} scrape failed. Failure count: {failures}")
                _scraper_event(
                    "error",
                    phase="circuit",
                    acquisition=label,
                    failures=failures,
                    threshold=self.breaker.threshold,
                    error_code=exc.error_code,
                )
            raise

        self.breaker.record_success()
        return result

    async def _with_retries(self, operation: Callable[[], Awaitable[T]], *, label: str) -> T:
        attempt = 0
        while True:
            attempt += 1
            try:
                return await operation()
            except Exception as exc:  # noqa: BLE001
                error_code = _error_code_for(exc)
                http_status = getattr(exc, "http_status", None)
                should_retry = decide_retry(
                    attempt,
                    self.max_attempts,
                    exc,
                    error_code=error_code,
                    http_status=http_status,
                )
                if not should_retry:
                    if error_code in NON_RETRYABLE_ERROR_CODES and isinstance(exc, CauseListError):
                        raise
                    raise ScrapeFailedError(
                        error_code,
                        f"{label} scrape failed after {attempt} attempt(s): {exc}",
                        attempts=attempt,
                        http_status=http_status,
                    ) from exc

                backoff = compute_backoff_seconds(attempt)
                log_line(f"[ORCHESTRATOR] Retry attempt {attempt + 1} after {backoff:.0f}s: {exc}")
                _scraper_event(
                    "state",
                    phase="scrape_retry",
                    acquisition=label,
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                    error_code=error_code,
                    backoff_seconds=backoff,
                )
                await self._sleep(backoff)

    def reset_circuit_breaker(self) -> None:
        self.breaker.reset()
        log_line("[ORCHESTRATOR] Circuit breaker reset")

    # ------------------------------------------------------------------
    # Browser flow
    # ------------------------------------------------------------------

    async def scrape(
        self,
        context: BrowserContext,
        date_str: str,
        court: Optional[str] = None,
    ) -> list[CauseListEntry]:
        """Scrape the daily list for ``date_str`` using ``context``."""

        return await self.run_guarded(
            lambda: self.run_once(context, date_str, court),
            label="browser",
        )

    async def run_once(
        self,
        context: BrowserContext,
        date_str: str,
        court: Optional[str],
    ) -> list[CauseListEntry]:
        """One unguarded attempt: navigate, select the date, run strategies."""

        page = await context.new_page()
        try:
            await self._navigate(page)
            await self._select_date(page, date_str)
            return await self._run_strategies(page, date_str, court)
        finally:
            try:
                await page.close()
            except PWError as exc:
                log_line(f"[ORCHESTRATOR][WARN] Page close failed: {exc}")

    async def _navigate(self, page: Page) -> None:
        timeout_ms = config.PLAYWRIGHT_NAV_TIMEOUT_SECONDS * 1000
        for page_name, url in (("landing", config.LANDING_URL), ("listing", config.LISTING_URL)):
            _scraper_event("nav", step="goto", page=page_name, url=url)
            await page.goto(url, timeout=timeout_ms, wait_until="domcontentloaded")

    async def _select_date(self, page: Page, date_str: str) -> None:
        selectors = self.selectors
        timeout_ms = config.PLAYWRIGHT_SELECTOR_TIMEOUT_SECONDS * 1000

        log_line("[ORCHESTRATOR] Selecting Daily List...")
        await page.wait_for_selector(selectors.daily_list_radio, timeout=timeout_ms)
        await page.click(selectors.daily_list_radio)

        log_line("[ORCHESTRATOR] Waiting for date dropdown...")
        await page.wait_for_selector(selectors.date_options, state="attached", timeout=timeout_ms)
        raw_values = await page.locator(selectors.date_options).evaluate_all(
            "opts => opts.map(o => o.getAttribute('value'))"
        )
        values = [str(value) for value in raw_values if value]
        log_line(f"[ORCHESTRATOR] Available dates: {len(values)} options")

        target = next((candidate for candidate in dropdown_candidates(date_str) if candidate in values), None)
        if target is None:
            first = values[0] if values else None
            log_line(f"[ORCHESTRATOR][WARN] Date {date_str} not available. First available: {first}")
            raise DateNotAvailableError(date_str, values)

        await page.select_option(selectors.date_select, target)
        log_line(f"[ORCHESTRATOR] Selected date: {target}")

        async with page.expect_navigation(
            wait_until="domcontentloaded",
            timeout=config.PLAYWRIGHT_NAV_TIMEOUT_SECONDS * 1000,
        ):
            await page.click(selectors.submit_button)
        log_line("[ORCHESTRATOR] Navigated to results page")

    async def _run_strategies(
        self,
        page: Page,
        date_str: str,
        court: Optional[str],
    ) -> list[CauseListEntry]:
        for strategy in self.strategies:
            log_line(f"[ORCHESTRATOR] Attempting strategy: {strategy.name}")

            if not await strategy.can_handle(page):
                log_line(f"[ORCHESTRATOR] Strategy {strategy.name} cannot handle current page state")
                continue

            entries = await strategy.run(page, date_str, court)
            if entries:
                log_line(f"[ORCHESTRATOR] Strategy {strategy.name} succeeded with {len(entries)} entries")
                _scraper_event("strategy", phase="result", strategy=strategy.name, entries=len(entries))
                return entries

            log_line(f"[ORCHESTRATOR][WARN] Strategy {strategy.name} returned no entries, trying next...")

        log_line("[ORCHESTRATOR][WARN] All strategies exhausted with no results")
        return []


__all__ = ["Orchestrator", "CircuitBreaker"]
