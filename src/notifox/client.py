from __future__ import annotations

import logging
import threading
import time
from typing import TypeVar

import httpx
from pydantic import BaseModel

from notifox.config import ClientConfig, load_client_config
from notifox.core.http.errors import (
    NotifoxCancelledError,
    NotifoxConfigurationError,
    NotifoxConnectionError,
    NotifoxError,
)
from notifox.core.http.exchange import ALERT_PATH, PARTS_PATH, build_request, encode_payload, read_result
from notifox.core.http.retry import backoff_delay, is_retryable
from notifox.core.logging import log_context
from notifox.schemas import AlertRequest, AlertResponse, Channel, PartsResponse
from notifox.validation import build_alert_request, build_parts_request, validate_alert_request

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)

_SEND_ALERT = "send_alert"


def _raise_if_cancelled(cancel_event: threading.Event | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise NotifoxCancelledError()


def _wait_backoff(delay_s: float, cancel_event: threading.Event | None) -> None:
    if cancel_event is None:
        time.sleep(delay_s)
        return
    if cancel_event.wait(delay_s):
        raise NotifoxCancelledError("operation cancelled during retry backoff")


class NotifoxClient:
    """Synchronous client for the Notifox alert API.

    The API key comes from ``api_key`` or the ``NOTIFOX_API_KEY`` environment
    variable; without either, construction raises NotifoxConfigurationError.
    A prepared ``config`` replaces all keyword settings. The client is safe to
    share between threads.

    Operations accept an optional ``cancel_event``. It is checked before each
    attempt and interrupts the backoff sleep between attempts. A request that
    is already in flight is bounded by the configured timeout instead.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        config: ClientConfig | None = None,
        base_url: str | None = None,
        timeout_s: float | None = None,
        max_retries: int | None = None,
        user_agent: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config if config is not None else load_client_config(
            api_key,
            base_url=base_url,
            timeout_s=timeout_s,
            max_retries=max_retries,
            user_agent=user_agent,
            transport=transport,
        )
        if self._config.transport is not None and not isinstance(self._config.transport, httpx.BaseTransport):
            raise NotifoxConfigurationError("NotifoxClient needs a synchronous httpx transport")
        self._http = httpx.Client(timeout=self._config.timeout_s, transport=self._config.transport)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> NotifoxClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def send_alert(
        self,
        audience: str,
        alert: str,
        *,
        channel: Channel | str | None = None,
        cancel_event: threading.Event | None = None,
    ) -> AlertResponse:
        """Send ``alert`` to ``audience``; an unset channel lets the service choose."""
        request = build_alert_request(audience, alert, channel)
        return self._send_alert(request, cancel_event)

    def send_alert_with_options(
        self,
        request: AlertRequest,
        *,
        cancel_event: threading.Event | None = None,
    ) -> AlertResponse:
        return self._send_alert(validate_alert_request(request), cancel_event)

    def calculate_parts(self, alert: str, *, cancel_event: threading.Event | None = None) -> PartsResponse:
        """Price ``alert`` without sending it. Makes a single attempt and needs no credential."""
        content = encode_payload(build_parts_request(alert))
        with log_context(operation="calculate_parts"):
            _raise_if_cancelled(cancel_event)
            try:
                return self._exchange(PARTS_PATH, content, PartsResponse)
            except NotifoxError as exc:
                logger.info("calculate_parts failed: %s", exc)
                raise

    def _send_alert(self, request: AlertRequest, cancel_event: threading.Event | None) -> AlertResponse:
        content = encode_payload(request)
        with log_context(operation=_SEND_ALERT):
            return self._send_with_retry(_SEND_ALERT, ALERT_PATH, content, AlertResponse, cancel_event)

    def _send_with_retry(
        self,
        operation: str,
        path: str,
        content: bytes,
        result_model: type[ResultT],
        cancel_event: threading.Event | None,
    ) -> ResultT:
        max_retries = self._config.max_retries
        for attempt in range(max_retries + 1):
            _raise_if_cancelled(cancel_event)
            try:
                return self._exchange(path, content, result_model)
            except NotifoxError as exc:
                if not is_retryable(exc) or attempt >= max_retries:
                    logger.info(
                        "Request to %s failed after %s attempt(s): %s",
                        path,
                        attempt + 1,
                        exc,
                        extra={
                            "extra_fields": {
                                "operation": operation,
                                "attempt": attempt + 1,
                                "error_type": exc.__class__.__name__,
                            }
                        },
                    )
                    raise
                delay_s = backoff_delay(attempt)
                logger.warning(
                    "Retrying %s in %.1fs after attempt %s failed: %s",
                    path,
                    delay_s,
                    attempt + 1,
                    exc,
                    extra={
                        "extra_fields": {
                            "operation": operation,
                            "attempt": attempt + 1,
                            "delay_s": delay_s,
                            "error_type": exc.__class__.__name__,
                        }
                    },
                )
            _wait_backoff(delay_s, cancel_event)

        raise NotifoxError(f"request to {path} finished without a result")

    def _exchange(self, path: str, content: bytes, result_model: type[ResultT]) -> ResultT:
        request = build_request(self._http, self._config, path, content)
        try:
            response = self._http.send(request)
        except httpx.HTTPError as exc:
            raise NotifoxConnectionError("request failed", exc) from exc
        logger.debug("POST %s -> %s", path, response.status_code)
        return read_result(response, result_model)
