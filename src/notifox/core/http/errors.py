from __future__ import annotations


class NotifoxError(RuntimeError):
    """Base error for every failure raised by the Notifox client."""

    def __init__(self, message: str, response_text: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.response_text = response_text


class NotifoxConfigurationError(NotifoxError):
    """Raised when a client cannot be constructed from the given settings."""


class NotifoxValidationError(NotifoxError, ValueError):
    """Raised for request input rejected before any network call."""


class NotifoxCancelledError(NotifoxError):
    """Raised when the caller's cancel event fires before the operation completes."""

    def __init__(self, message: str = "operation cancelled") -> None:
        super().__init__(message)


def _with_text(prefix: str, response_text: str) -> str:
    if response_text:
        return f"{prefix}: {response_text}"
    return prefix


class NotifoxAuthenticationError(NotifoxError):
    def __init__(self, status_code: int, response_text: str = "") -> None:
        super().__init__(_with_text(f"authentication failed ({status_code})", response_text), response_text)
        self.status_code = status_code


class NotifoxInsufficientBalanceError(NotifoxError):
    status_code = 402

    def __init__(self, response_text: str = "") -> None:
        super().__init__(_with_text("insufficient balance", response_text), response_text)


class NotifoxRateLimitError(NotifoxError):
    status_code = 429

    def __init__(self, response_text: str = "") -> None:
        super().__init__(_with_text("rate limit exceeded", response_text), response_text)


class NotifoxAPIError(NotifoxError):
    def __init__(self, status_code: int, response_text: str = "") -> None:
        super().__init__(_with_text(f"API error ({status_code})", response_text), response_text)
        self.status_code = status_code


class NotifoxConnectionError(NotifoxError):
    """Network-layer failure that produced no HTTP status; ``cause`` holds the original exception."""

    def __init__(self, description: str, cause: BaseException | None = None) -> None:
        if cause is not None:
            message = f"connection failed: {cause}"
        else:
            message = f"connection failed: {description}"
        super().__init__(message)
        self.description = description
        self.cause = cause
