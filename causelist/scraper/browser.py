"""Shared Chromium lifecycle for cause list scrapes.

Launching Chromium is the expensive step of a scrape, so one browser process is
kept alive for the life of the :class:`SessionManager` and every request gets
its own isolated context from it. Launches are single-flight: callers that
arrive while a launch is in progress wait on the same lock (bounded by
``config.BROWSER_LAUNCH_WAIT_SECONDS``) and then reuse the launched browser.

A manager is bound to the event loop it is first used on.
"""
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Optional, Tuple

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PWError,
    Playwright,
    async_playwright,
)

from . import config
from .error_codes import ErrorCode
from .errors import BrowserLaunchError
from .logging_utils import _scraper_event
from .utils import log_line

Launcher = Callable[[], Awaitable[Tuple[Optional[Playwright], Browser]]]


async def launch_chromium() -> Tuple[Playwright, Browser]:
    """Start Playwright and launch a headless Chromium."""

    playwright = await async_playwright().start()
    try:
        browser = await playwright.chromium.launch(
            headless=config.BROWSER_HEADLESS,
            args=list(config.BROWSER_ARGS),
        )
    except PWError as exc:
        await playwright.stop()
        raise BrowserLaunchError(ErrorCode.BROWSER_LAUNCH, f"Chromium launch failed: {exc}") from exc
    return playwright, browser


class SessionManager:
    def __init__(
        self,
        *,
        launcher: Optional[Launcher] = None,
        launch_wait_seconds: Optional[float] = None,
    ) -> None:
        self._launcher: Launcher = launcher or launch_chromium
        self._launch_wait = (
            launch_wait_seconds
            if launch_wait_seconds is not None
            else config.BROWSER_LAUNCH_WAIT_SECONDS
        )
        self._lock = asyncio.Lock()
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self.launch_count = 0

    def _live_browser(self) -> Optional[Browser]:
        browser = self._browser
        if browser is not None and browser.is_connected():
            return browser
        return None

    async def acquire(self) -> Browser:
        """Return the shared browser, launching it if none is connected."""

        browser = self._live_browser()
        if browser is not None:
            return browser

        # Lock.acquire() gives the lock back if it is cancelled by the timeout,
        # so a timed-out waiter never leaves it held.
        try:
            async with asyncio.timeout(self._launch_wait):
                await self._lock.acquire()
        except TimeoutError:
            _scraper_event("error", phase="browser", step="launch_wait_timeout", wait_seconds=self._launch_wait)
            raise BrowserLaunchError(
                ErrorCode.BROWSER_LAUNCH,
                f"Timed out after {self._launch_wait}s waiting for browser launch",
            ) from None

        try:
            # Another caller may have finished launching while we waited.
            browser = self._live_browser()
            if browser is not None:
                return browser

            await self._release_handles()
            log_line("[BROWSER] Launching Playwright browser...")
            self._playwright, self._browser = await self._launcher()
            self.launch_count += 1
            _scraper_event("browser", phase="launch", launch_count=self.launch_count)
            log_line("[BROWSER] Browser launched successfully")
            return self._browser
        finally:
            self._lock.release()

    async def new_context(self) -> BrowserContext:
        """Create an isolated context with downloads enabled."""

        browser = await self.acquire()
        return await browser.new_context(accept_downloads=True, user_agent=config.UA)

    @asynccontextmanager
    async def context(self) -> AsyncIterator[BrowserContext]:
        """Yield a fresh context and close it however the caller exits."""

        ctx = await self.new_context()
        try:
            yield ctx
        finally:
            try:
                await ctx.close()
            except PWError as exc:
                log_line(f"[BROWSER][WARN] Context close failed: {exc}")

    async def _release_handles(self) -> None:
        browser, playwright = self._browser, self._playwright
        self._browser = None
        self._playwright = None

        if browser is not None:
            try:
                await browser.close()
            except PWError as exc:
                log_line(f"[BROWSER][WARN] Browser close failed: {exc}")
        if playwright is not None:
            try:
                await playwright.stop()
            except PWError as exc:
                log_line(f"[BROWSER][WARN] Playwright stop failed: {exc}")

    async def shutdown(self) -> None:
        """Close the shared browser. Safe to call when none is running."""

        async with self._lock:
            if self._browser is None and self._playwright is None:
                return
            log_line("[BROWSER] Closing browser...")
            await self._release_handles()
            _scraper_event("browser", phase="shutdown")


__all__ = ["SessionManager", "launch_chromium"]
