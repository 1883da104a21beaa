import asyncio

import pytest

from causelist.scraper import config
from causelist.scraper.browser import SessionManager
from causelist.scraper.errors import BrowserLaunchError


class _FakeContext:
    def __init__(self, kwargs):
        self.kwargs = kwargs
        self.closed = False

    async def close(self) -> None:
        self.closed = True


class _FakeBrowser:
    def __init__(self):
        self.connected = True
        self.closed = False
        self.contexts: list[_FakeContext] = []

    def is_connected(self) -> bool:
        return self.connected

    async def new_context(self, **kwargs):
        context = _FakeContext(kwargs)
        self.contexts.append(context)
        return context

    async def close(self) -> None:
        self.closed = True
        self.connected = False


def _launcher(launched: list, delay: float = 0.01):
    async def _launch():
        await asyncio.sleep(delay)
        browser = _FakeBrowser()
        launched.append(browser)
        return None, browser

    return _launch


def test_concurrent_acquire_launches_once() -> None:
    launched: list[_FakeBrowser] = []

    async def _scenario():
        manager = SessionManager(launcher=_launcher(launched))
        browsers = await asyncio.gather(*(manager.acquire() for _ in range(5)))
        return manager, browsers

    manager, browsers = asyncio.run(_scenario())

    assert manager.launch_count == 1
    assert len(launched) == 1
    assert all(browser is launched[0] for browser in browsers)


def test_acquire_relaunches_disconnected_browser() -> None:
    launched: list[_FakeBrowser] = []

    async def _scenario():
        manager = SessionManager(launcher=_launcher(launched))
        first = await manager.acquire()
        first.connected = False
        second = await manager.acquire()
        return manager, first, second

    manager, first, second = asyncio.run(_scenario())

    assert manager.launch_count == 2
    assert second is not first
    assert first.closed is True


def test_launch_wait_is_bounded() -> None:
    launched: list[_FakeBrowser] = []

    async def _scenario():
        manager = SessionManager(launcher=_launcher(launched, delay=0.5), launch_wait_seconds=0.05)
        slow = asyncio.create_task(manager.acquire())
        await asyncio.sleep(0.01)
        with pytest.raises(BrowserLaunchError):
            await manager.acquire()
        first = await slow
        return manager, first, await manager.acquire()

    manager, first, again = asyncio.run(_scenario())

    assert not manager._lock.locked()
    assert again is first
    assert manager.launch_count == 1


def test_timed_out_waiter_does_not_hold_launch_lock() -> None:
    launched: list[_FakeBrowser] = []

    async def _scenario():
        manager = SessionManager(launcher=_launcher(launched, delay=0.05), launch_wait_seconds=0.01)
        slow = asyncio.create_task(manager.acquire())
        await asyncio.sleep(0)
        waiters = [asyncio.create_task(manager.acquire()) for _ in range(3)]
        results = await asyncio.gather(*waiters, return_exceptions=True)
        await slow
        first_browser = launched[0]
        first_browser.connected = False
        relaunched = await asyncio.wait_for(manager.acquire(), timeout=1)
        return manager, results, relaunched

    manager, results, relaunched = asyncio.run(_scenario())

    assert all(isinstance(result, BrowserLaunchError) for result in results)
    assert not manager._lock.locked()
    assert relaunched is launched[1]
    assert manager.launch_count == 2


def test_context_is_isolated_and_always_closed() -> None:
    launched: list[_FakeBrowser] = []

    async def _scenario():
        manager = SessionManager(launcher=_launcher(launched))
        with pytest.raises(RuntimeError):
            async with manager.context() as ctx:
                raise RuntimeError("scrape failed")
        return ctx

    ctx = asyncio.run(_scenario())

    assert ctx.closed is True
    assert ctx.kwargs == {"accept_downloads": True, "user_agent": config.UA}


def test_shutdown_is_safe_without_browser_and_closes_live_one() -> None:
    launched: list[_FakeBrowser] = []

    async def _scenario():
        manager = SessionManager(launcher=_launcher(launched))
        await manager.shutdown()
        await manager.acquire()
        await manager.shutdown()
        await manager.shutdown()

    asyncio.run(_scenario())

    assert len(launched) == 1
    assert launched[0].closed is True
