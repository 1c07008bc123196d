from __future__ import annotations

import httpx
import pytest
from pydantic import BaseModel, ConfigDict

from helpers import ALERT_OK
from notifox.config import load_client_config
from notifox.core.http.errors import NotifoxAPIError, NotifoxConnectionError, NotifoxRateLimitError
from notifox.core.http.exchange import ALERT_PATH, PARTS_PATH, build_headers, build_request, encode_payload, read_result
from notifox.schemas import AlertRequest, AlertResponse


class _Opaque(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    value: object


def test_headers_carry_credential_except_for_parts() -> None:
    config = load_client_config("test-api-key", user_agent="ops-bot/2.0")

    alert_headers = build_headers(config, ALERT_PATH)
    parts_headers = build_headers(config, PARTS_PATH)

    assert alert_headers == {
        "Content-Type": "application/json",
        "User-Agent": "ops-bot/2.0",
        "Authorization": "Bearer test-api-key",
    }
    assert "Authorization" not in parts_headers
    assert parts_headers["Content-Type"] == "application/json"


def test_encode_payload_omits_unset_channel() -> None:
    assert encode_payload(AlertRequest(audience="ops", alert="hi")) == b'{"audience":"ops","alert":"hi"}'


def test_marshal_failure_is_connection_error() -> None:
    with pytest.raises(NotifoxConnectionError) as exc_info:
        encode_payload(_Opaque(value=object()))

    assert exc_info.value.description == "failed to marshal request"
    assert exc_info.value.cause is not None


def test_request_construction_failure_is_connection_error() -> None:
    config = load_client_config("test-api-key", base_url="http://notifox.test:notaport")

    with httpx.Client() as client:
        with pytest.raises(NotifoxConnectionError) as exc_info:
            build_request(client, config, ALERT_PATH, b"{}")

    assert exc_info.value.description == "failed to create request"


def test_read_result_decodes_success() -> None:
    response = httpx.Response(201, json=ALERT_OK)

    assert read_result(response, AlertResponse).message_id == ALERT_OK["message_id"]


def test_read_result_missing_fields_decode_to_zero_values() -> None:
    response = httpx.Response(200, json={"message_id": "m-1"})

    result = read_result(response, AlertResponse)

    assert result.message_id == "m-1"
    assert result.parts == 0
    assert result.cost == 0.0
    assert result.currency == ""


def test_read_result_wrong_field_type_is_api_error() -> None:
    response = httpx.Response(200, json={"message_id": "m-1", "parts": "many"})

    with pytest.raises(NotifoxAPIError) as exc_info:
        read_result(response, AlertResponse)

    assert exc_info.value.status_code == 200


def test_read_result_classifies_failures() -> None:
    with pytest.raises(NotifoxRateLimitError, match="slow down"):
        read_result(httpx.Response(429, json={"error": "slow down"}), AlertResponse)
