from __future__ import annotations

from notifox.core.http.errors import NotifoxValidationError
from notifox.schemas import AlertRequest, Channel, PartsRequest

_CHANNEL_ERROR = "channel must be either 'sms' or 'email'"


def coerce_channel(channel: Channel | str | None) -> Channel | None:
    if channel is None or channel == "":
        return None
    if isinstance(channel, Channel):
        return channel
    try:
        return Channel(channel)
    except ValueError as exc:
        raise NotifoxValidationError(_CHANNEL_ERROR) from exc


def validate_alert_request(request: AlertRequest) -> AlertRequest:
    """Reject requests the service would refuse, before any network I/O."""
    if not request.audience:
        raise NotifoxValidationError("audience cannot be empty")
    if not request.alert:
        raise NotifoxValidationError("alert message cannot be empty")
    # model_construct() skips field validation, so the channel is re-checked here.
    channel = coerce_channel(request.channel)
    if channel is not request.channel:
        return request.model_copy(update={"channel": channel})
    return request


def build_alert_request(audience: str, alert: str, channel: Channel | str | None = None) -> AlertRequest:
    request = AlertRequest.model_construct(audience=audience, alert=alert, channel=channel)
    return validate_alert_request(request)


def build_parts_request(alert: str) -> PartsRequest:
    if not alert:
        raise NotifoxValidationError("alert message cannot be empty")
    return PartsRequest(alert=alert)
