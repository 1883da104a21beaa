from __future__ import annotations

from typing import Optional

from . import config
from .error_codes import ErrorCode
from .logging_utils import _scraper_event

RETRYABLE_ERROR_CODES = {
    ErrorCode.NETWORK,
    ErrorCode.HTTP_5XX,
    ErrorCode.NAV_TIMEOUT,
    ErrorCode.SITE_STRUCTURE,
    ErrorCode.BROWSER_LAUNCH,
}

NON_RETRYABLE_ERROR_CODES = {
    # Deterministic absences: retrying cannot change the answer.
    ErrorCode.DATE_NOT_AVAILABLE,
    ErrorCode.HTTP_404,
    ErrorCode.HTTP_4XX,
    ErrorCode.MALFORMED_FEED,
    ErrorCode.CIRCUIT_OPEN,
}


def compute_backoff_seconds(attempt_index: int) -> float:
    """Return the exponential backoff after the given failed attempt (1-based).

    Attempt 1 waits 2 seconds, attempt 2 waits 4 seconds, capped by
    ``config.MAX_BACKOFF_SECONDS``.
    """

    return float(min(2 ** max(1, attempt_index), config.MAX_BACKOFF_SECONDS))


def decide_retry(
    attempt_index: int,
    max_attempts: int,
    error: BaseException | None = None,
    *,
    error_code: Optional[str] = None,
    http_status: Optional[int] = None,
) -> bool:
    """Decide whether a failed attempt should be retried.

    Any failure is retried until ``max_attempts`` is reached, except the
    deterministic codes in ``NON_RETRYABLE_ERROR_CODES``.
    """

    code = (error_code or "").strip()

    if attempt_index >= max_attempts:
        _scraper_event(
            "state",
            phase="retry_decision",
            kind="capped",
            attempt=attempt_index,
            max_attempts=max_attempts,
            error_code=code or None,
            http_status=http_status,
            will_retry=False,
        )
        return False

    if code in NON_RETRYABLE_ERROR_CODES:
        _scraper_event(
            "state",
            phase="retry_decision",
            kind="non_retryable",
            error_code=code,
            attempt=attempt_index,
            max_attempts=max_attempts,
            http_status=http_status,
            will_retry=False,
        )
        return False

    if code in RETRYABLE_ERROR_CODES or (http_status is not None and http_status >= 500):
        kind = "retryable"
    else:
        kind = "unknown" if code else "missing_error_code"

    _scraper_event(
        "state",
        phase="retry_decision",
        kind=kind,
        error_code=code or None,
        attempt=attempt_index,
        max_attempts=max_attempts,
        http_status=http_status,
        will_retry=True,
        error_repr=repr(error) if error is not None and kind != "retryable" else None,
    )
    return True


__all__ = [
    "decide_retry",
    "compute_backoff_seconds",
    "RETRYABLE_ERROR_CODES",
    "NON_RETRYABLE_ERROR_CODES",
]
