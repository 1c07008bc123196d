from __future__ import annotations

import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from notifox.config import ClientConfig

from .classify import classify_status
from .errors import NotifoxAPIError, NotifoxConnectionError

logger = logging.getLogger(__name__)

ALERT_PATH = "/alert"
PARTS_PATH = "/alert/parts"

_UNAUTHENTICATED_PATHS = frozenset({PARTS_PATH})

ResultT = TypeVar("ResultT", bound=BaseModel)


def build_url(config: ClientConfig, path: str) -> str:
    return f"{config.base_url}{path}"


def build_headers(config: ClientConfig, path: str) -> dict[str, str]:
    headers = {
        "Content-Type": "application/json",
        "User-Agent": config.user_agent,
    }
    if path not in _UNAUTHENTICATED_PATHS:
        headers["Authorization"] = f"Bearer {config.api_key}"
    return headers


def encode_payload(payload: BaseModel) -> bytes:
    try:
        return payload.model_dump_json(exclude_none=True).encode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise NotifoxConnectionError("failed to marshal request", exc) from exc


def build_request(
    client: httpx.Client | httpx.AsyncClient,
    config: ClientConfig,
    path: str,
    content: bytes,
) -> httpx.Request:
    try:
        return client.build_request(
            "POST",
            build_url(config, path),
            content=content,
            headers=build_headers(config, path),
        )
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise NotifoxConnectionError("failed to create request", exc) from exc


def read_result(response: httpx.Response, result_model: type[ResultT]) -> ResultT:
    """Decode a 2xx body into ``result_model`` or raise the classified error for the status."""
    status = response.status_code
    body = response.text
    if 200 <= status < 300:
        try:
            result = result_model.model_validate_json(response.content)
        except ValidationError as exc:
            # Undecodable 2xx bodies are API errors carrying the 2xx status.
            logger.info("Undecodable %s body with status %s: %s", result_model.__name__, status, exc.error_count())
            raise NotifoxAPIError(status, body) from exc
        return result
    raise classify_status(status, body)
