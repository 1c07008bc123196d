from __future__ import annotations

from notifox.config import BACKOFF_STEP_S

from .errors import (
    NotifoxAPIError,
    NotifoxAuthenticationError,
    NotifoxConnectionError,
    NotifoxError,
    NotifoxInsufficientBalanceError,
    NotifoxRateLimitError,
)

_TERMINAL_ERRORS = (NotifoxAuthenticationError, NotifoxRateLimitError)
_RETRYABLE_ERRORS = (NotifoxConnectionError, NotifoxInsufficientBalanceError)


def is_retryable(exc: NotifoxError) -> bool:
    """Return True when another attempt could succeed after ``exc``."""
    if isinstance(exc, _TERMINAL_ERRORS):
        return False
    if isinstance(exc, NotifoxAPIError):
        return not 400 <= exc.status_code < 500
    return isinstance(exc, _RETRYABLE_ERRORS)


def backoff_delay(attempt: int) -> float:
    """Linear delay after the zero-based ``attempt`` that just failed."""
    return (attempt + 1) * BACKOFF_STEP_S
