from .classify import classify_status, resolve_response_text
from .errors import (
    NotifoxAPIError,
    NotifoxAuthenticationError,
    NotifoxCancelledError,
    NotifoxConfigurationError,
    NotifoxConnectionError,
    NotifoxError,
    NotifoxInsufficientBalanceError,
    NotifoxRateLimitError,
    NotifoxValidationError,
)

__all__ = [
    "classify_status",
    "resolve_response_text",
    "NotifoxError",
    "NotifoxAPIError",
    "NotifoxAuthenticationError",
    "NotifoxCancelledError",
    "NotifoxConfigurationError",
    "NotifoxConnectionError",
    "NotifoxInsufficientBalanceError",
    "NotifoxRateLimitError",
    "NotifoxValidationError",
]
