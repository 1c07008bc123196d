from __future__ import annotations

import pytest

from notifox.core.http.errors import (
    NotifoxAPIError,
    NotifoxAuthenticationError,
    NotifoxConnectionError,
    NotifoxInsufficientBalanceError,
    NotifoxRateLimitError,
)
from notifox.core.http.retry import backoff_delay, is_retryable


def test_terminal_errors_are_not_retried() -> None:
    assert not is_retryable(NotifoxAuthenticationError(401, "Unauthorized"))
    assert not is_retryable(NotifoxAuthenticationError(403))
    assert not is_retryable(NotifoxRateLimitError())


def test_insufficient_balance_is_retryable() -> None:
    assert is_retryable(NotifoxInsufficientBalanceError("top up required"))


@pytest.mark.parametrize("status", [400, 404, 422, 499])
def test_client_side_api_errors_are_terminal(status: int) -> None:
    assert not is_retryable(NotifoxAPIError(status))


@pytest.mark.parametrize("status", [500, 502, 503, 504])
def test_server_side_api_errors_are_retryable(status: int) -> None:
    assert is_retryable(NotifoxAPIError(status))


def test_undecodable_success_body_is_retryable() -> None:
    assert is_retryable(NotifoxAPIError(200, "not json"))


def test_connection_errors_are_retryable() -> None:
    assert is_retryable(NotifoxConnectionError("request failed", OSError("reset")))


def test_backoff_is_linear_in_hundred_millisecond_steps() -> None:
    assert [backoff_delay(attempt) for attempt in range(4)] == pytest.approx([0.1, 0.2, 0.3, 0.4])
