from __future__ import annotations

import asyncio
import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel

from notifox.config import ClientConfig, load_client_config
from notifox.core.http.errors import NotifoxConfigurationError, NotifoxConnectionError, NotifoxError
from notifox.core.http.exchange import ALERT_PATH, PARTS_PATH, build_request, encode_payload, read_result
from notifox.core.http.retry import backoff_delay, is_retryable
from notifox.core.logging import log_context
from notifox.schemas import AlertRequest, AlertResponse, Channel, PartsResponse
from notifox.validation import build_alert_request, build_parts_request, validate_alert_request

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)

_SEND_ALERT = "send_alert"


class AsyncNotifoxClient:
    """asyncio counterpart of NotifoxClient.

    Cancelling the calling task aborts the in-flight request or the backoff
    sleep; ``asyncio.CancelledError`` reaches the caller unchanged. Wrap a
    call in ``asyncio.timeout(...)`` for a deadline.
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
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config if config is not None else load_client_config(
            api_key,
            base_url=base_url,
            timeout_s=timeout_s,
            max_retries=max_retries,
            user_agent=user_agent,
            transport=transport,
        )
        if self._config.transport is not None and not isinstance(self._config.transport, httpx.AsyncBaseTransport):
            raise NotifoxConfigurationError("AsyncNotifoxClient needs an asynchronous httpx transport")
        self._http = httpx.AsyncClient(timeout=self._config.timeout_s, transport=self._config.transport)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> AsyncNotifoxClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def send_alert(self, audience: str, alert: str, *, channel: Channel | str | None = None) -> AlertResponse:
        request = build_alert_request(audience, alert, channel)
        return await self._send_alert(request)

    async def send_alert_with_options(self, request: AlertRequest) -> AlertResponse:
        return await self._send_alert(validate_alert_request(request))

    async def calculate_parts(self, alert: str) -> PartsResponse:
        content = encode_payload(build_parts_request(alert))
        with log_context(operation="calculate_parts"):
            try:
                return await self._exchange(PARTS_PATH, content, PartsResponse)
            except NotifoxError as exc:
                logger.info("calculate_parts failed: %s", exc)
                raise

    async def _send_alert(self, request: AlertRequest) -> AlertResponse:
        content = encode_payload(request)
        with log_context(operation=_SEND_ALERT):
            return await self._send_with_retry(_SEND_ALERT, ALERT_PATH, content, AlertResponse)

    async def _send_with_retry(
        self,
        operation: str,
        path: str,
        content: bytes,
        result_model: type[ResultT],
    ) -> ResultT:
        max_retries = self._config.max_retries
        for attempt in range(max_retries + 1):
            try:
                return await self._exchange(path, content, result_model)
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
            await asyncio.sleep(delay_s)

        raise NotifoxError(f"request to {path} finished without a result")

    async def _exchange(self, path: str, content: bytes, result_model: type[ResultT]) -> ResultT:
        request = build_request(self._http, self._config, path, content)
        try:
            response = await self._http.send(request)
        except httpx.HTTPError as exc:
            raise NotifoxConnectionError("request failed", exc) from exc
        logger.debug("POST %s -> %s", path, response.status_code)
        return read_result(response, result_model)
