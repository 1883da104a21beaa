"""Typed errors raised across the engine boundary."""
from __future__ import annotations

from .error_codes import ErrorCode


class CauseListError(Exception):
    def __init__(self, error_code: str, message: str, *, http_status: int | None = None) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.http_status = http_status

    def __str__(self) -> str:  # pragma: no cover - inherited behaviour
        return str(self.args[0]) if self.args else ""


class ScrapeFailedError(CauseListError):
    """Raised once every attempt of a scrape has failed."""

    def __init__(self, error_code: str, message: str, *, attempts: int, http_status: int | None = None) -> None:
        super().__init__(error_code, message, http_status=http_status)
        self.attempts = attempts


class CircuitOpenError(CauseListError):
    """Raised without any network activity while the circuit breaker is open."""

    def __init__(self, failures: int) -> None:
        super().__init__(
            ErrorCode.CIRCUIT_OPEN,
            "Service temporarily unavailable due to repeated failures",
        )
        self.failures = failures


class DateNotAvailableError(CauseListError):
    def __init__(self, date: str, available: list[str] | None = None) -> None:
        super().__init__(ErrorCode.DATE_NOT_AVAILABLE, f"Date {date} not found in dropdown")
        self.date = date
        self.available = list(available or [])


class FeedError(CauseListError):
    pass


class BrowserLaunchError(CauseListError):
    pass


__all__ = [
    "CauseListError",
    "ScrapeFailedError",
    "CircuitOpenError",
    "DateNotAvailableError",
    "FeedError",
    "BrowserLaunchError",
]
