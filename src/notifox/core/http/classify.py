from __future__ import annotations

from pydantic import ValidationError

from notifox.schemas import ErrorEnvelope

from .errors import (
    NotifoxAPIError,
    NotifoxAuthenticationError,
    NotifoxError,
    NotifoxInsufficientBalanceError,
    NotifoxRateLimitError,
)

# 401 bodies are plain text from the service, never the JSON envelope.
_RAW_TEXT_STATUSES = frozenset({401})
_AUTH_STATUSES = frozenset({401, 403})


def resolve_response_text(status_code: int, body: str) -> str:
    if status_code in _RAW_TEXT_STATUSES:
        return body
    try:
        envelope = ErrorEnvelope.model_validate_json(body)
    except ValidationError:
        return body
    if envelope.error:
        return envelope.error
    return body


def classify_status(status_code: int, body: str) -> NotifoxError:
    """Map a non-2xx status and its raw body to exactly one classified error."""
    text = resolve_response_text(status_code, body)
    if status_code in _AUTH_STATUSES:
        return NotifoxAuthenticationError(status_code, text)
    if status_code == 402:
        return NotifoxInsufficientBalanceError(text)
    if status_code == 429:
        return NotifoxRateLimitError(text)
    return NotifoxAPIError(status_code, text)
