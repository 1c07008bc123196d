from __future__ import annotations

import io
import json
import logging

from notifox.core.logging.context import get_log_context, log_context
from notifox.core.logging.json_formatter import JSONFormatter


def _json_logger(name: str) -> tuple[logging.Logger, io.StringIO]:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())

    logger = logging.getLogger(name)
    logger.handlers = []
    logger.setLevel(logging.INFO)
    logger.propagate = False
    logger.addHandler(handler)
    return logger, stream


def test_logging_json_line_with_context() -> None:
    logger, stream = _json_logger("notifox.test.json")

    with log_context(correlation_id="c1", operation="send_alert"):
        logger.info("hello", extra={"extra_fields": {"attempt": 2}})

    payload = json.loads(stream.getvalue().strip())
    assert payload["msg"] == "hello"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "notifox.test.json"
    assert payload["correlation_id"] == "c1"
    assert payload["operation"] == "send_alert"
    assert payload["attempt"] == 2
    assert "ts_iso_utc" in payload


def test_logging_redacts_bearer_tokens() -> None:
    logger, stream = _json_logger("notifox.test.redact")

    logger.info("sent Authorization: Bearer sk_live_123 with api_key=sk_live_123")

    payload = json.loads(stream.getvalue().strip())
    assert "sk_live_123" not in payload["msg"]
    assert "Bearer ***" in payload["msg"]


def test_nested_context_keeps_outer_correlation_id() -> None:
    with log_context(correlation_id="outer"):
        with log_context(operation="calculate_parts"):
            assert get_log_context() == {"correlation_id": "outer", "operation": "calculate_parts"}
        assert get_log_context() == {"correlation_id": "outer"}
    assert get_log_context() == {}
