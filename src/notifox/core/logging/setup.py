"""Opt-in JSON logging for the ``notifox`` logger.

Environment:

- ``NOTIFOX_LOG_LEVEL``: level name, INFO when unset or unknown.
- ``NOTIFOX_LOG_TO_FILE``: ``on`` adds a rotating file next to stdout.
- ``NOTIFOX_LOG_DIR``: directory for ``notifox.log``.
- ``NOTIFOX_LOG_MAX_BYTES`` / ``NOTIFOX_LOG_BACKUP_COUNT``: rotation limits;
  malformed values fall back to the defaults below.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from notifox.config import _get_int_env, _get_str_env

from .json_formatter import JSONFormatter

LOGGER_NAME = "notifox"
LOG_FILE_NAME = "notifox.log"
DEFAULT_LOG_MAX_BYTES = 5_000_000
DEFAULT_LOG_BACKUP_COUNT = 5

_MARKER = "_notifox_json_logging"


def _level_from_env() -> int:
    level = logging.getLevelName((_get_str_env("NOTIFOX_LOG_LEVEL") or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def _file_output_enabled() -> bool:
    return (_get_str_env("NOTIFOX_LOG_TO_FILE") or "off").casefold() == "on"


def _is_ours(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _MARKER, False))


def _attach(logger: logging.Logger, handler: logging.Handler, formatter: logging.Formatter) -> None:
    handler.setFormatter(formatter)
    setattr(handler, _MARKER, True)
    logger.addHandler(handler)


def _has_stdout_handler(logger: logging.Logger) -> bool:
    # RotatingFileHandler is a StreamHandler too
    return any(_is_ours(h) and not isinstance(h, logging.FileHandler) for h in logger.handlers)


def _has_file_handler(logger: logging.Logger, log_path: str) -> bool:
    return any(
        _is_ours(h) and isinstance(h, RotatingFileHandler) and h.baseFilename == log_path
        for h in logger.handlers
    )


def _log_path(log_dir: Path | None) -> str:
    target_dir = Path(_get_str_env("NOTIFOX_LOG_DIR") or log_dir or "logs")
    target_dir.mkdir(parents=True, exist_ok=True)
    # matches RotatingFileHandler.baseFilename
    return os.path.abspath(target_dir / LOG_FILE_NAME)


def _rotating_file_handler(log_path: str) -> RotatingFileHandler:
    return RotatingFileHandler(
        filename=log_path,
        maxBytes=_get_int_env("NOTIFOX_LOG_MAX_BYTES", DEFAULT_LOG_MAX_BYTES),
        backupCount=_get_int_env("NOTIFOX_LOG_BACKUP_COUNT", DEFAULT_LOG_BACKUP_COUNT),
        encoding="utf-8",
    )


def configure_logging(log_dir: Path | None = None) -> logging.Logger:
    """Attach JSON handlers to the ``notifox`` logger. Safe to call more than once.

    The library never calls this itself; applications opt in. The file goes
    to ``NOTIFOX_LOG_DIR``, else ``log_dir``, else ``./logs``.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_level_from_env())
    logger.propagate = False
    formatter = JSONFormatter()

    if not _has_stdout_handler(logger):
        _attach(logger, logging.StreamHandler(stream=sys.stdout), formatter)

    if _file_output_enabled():
        log_path = _log_path(log_dir)
        if not _has_file_handler(logger, log_path):
            _attach(logger, _rotating_file_handler(log_path), formatter)

    return logger
