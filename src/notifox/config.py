"""Client configuration: default constants, environment fallbacks and the YAML loader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import httpx
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from notifox.core.http.errors import NotifoxConfigurationError

__version__ = "0.1.0"

DEFAULT_BASE_URL = "https://api.notifox.com"
DEFAULT_TIMEOUT_S = 30.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_USER_AGENT = f"notifox-python/{__version__}"
BACKOFF_STEP_S = 0.1

ENV_API_KEY = "NOTIFOX_API_KEY"
ENV_BASE_URL = "NOTIFOX_BASE_URL"
ENV_TIMEOUT_S = "NOTIFOX_TIMEOUT_S"
ENV_MAX_RETRIES = "NOTIFOX_MAX_RETRIES"
ENV_USER_AGENT = "NOTIFOX_USER_AGENT"

_FILE_KEYS = {"api_key", "base_url", "timeout_s", "max_retries", "user_agent"}


class ClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    api_key: str = Field(min_length=1, repr=False)
    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = Field(DEFAULT_TIMEOUT_S, gt=0)
    max_retries: int = Field(DEFAULT_MAX_RETRIES, ge=0)
    user_agent: str = DEFAULT_USER_AGENT
    transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = Field(default=None, repr=False)

    @field_validator("api_key", mode="before")
    @classmethod
    def _strip_api_key(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def _get_str_env(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def load_client_config(
    api_key: str | None = None,
    *,
    base_url: str | None = None,
    timeout_s: float | None = None,
    max_retries: int | None = None,
    user_agent: str | None = None,
    transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = None,
) -> ClientConfig:
    """Resolve a ClientConfig from explicit values, then the environment, then defaults.

    The API key falls back to ``NOTIFOX_API_KEY``. A missing key raises
    NotifoxConfigurationError here, so no client can exist without one.
    """
    if isinstance(api_key, str):
        api_key = api_key.strip()
    resolved_key = api_key or _get_str_env(ENV_API_KEY)
    if not resolved_key:
        raise NotifoxConfigurationError(
            f"api key is required (provide it directly or set {ENV_API_KEY} environment variable)"
        )

    values: dict[str, Any] = {
        "api_key": resolved_key,
        "base_url": base_url or _get_str_env(ENV_BASE_URL) or DEFAULT_BASE_URL,
        "timeout_s": _get_float_env(ENV_TIMEOUT_S, DEFAULT_TIMEOUT_S) if timeout_s is None else timeout_s,
        "max_retries": _get_int_env(ENV_MAX_RETRIES, DEFAULT_MAX_RETRIES) if max_retries is None else max_retries,
        "user_agent": user_agent or _get_str_env(ENV_USER_AGENT) or DEFAULT_USER_AGENT,
        "transport": transport,
    }
    try:
        return ClientConfig(**values)
    except ValidationError as exc:
        raise NotifoxConfigurationError(f"invalid client configuration: {exc}") from exc


def load_config_file(
    path: str | Path,
    *,
    transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = None,
) -> ClientConfig:
    """Load client settings from a YAML mapping; unset keys use the environment and defaults."""
    cfg_path = Path(path)
    try:
        with cfg_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise NotifoxConfigurationError(f"could not read config file {cfg_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise NotifoxConfigurationError(f"config file {cfg_path} must contain a mapping")
    unknown = set(data) - _FILE_KEYS
    if unknown:
        raise NotifoxConfigurationError(f"unknown config keys in {cfg_path}: {', '.join(sorted(unknown))}")

    return load_client_config(**data, transport=transport)
