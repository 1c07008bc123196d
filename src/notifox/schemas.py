from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class Channel(str, Enum):
    SMS = "sms"
    EMAIL = "email"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class AlertRequest(_Frozen):
    audience: str
    alert: str
    channel: Channel | None = None

    @field_validator("channel", mode="before")
    @classmethod
    def _blank_channel_is_unset(cls, value: object) -> object:
        if value == "":
            return None
        return value


class AlertResponse(_Frozen):
    # Missing keys decode to zero values; only malformed JSON or wrong types fail.
    message_id: str = ""
    parts: int = 0
    cost: float = 0.0
    currency: str = ""
    encoding: str = ""
    characters: int = 0


class PartsRequest(_Frozen):
    alert: str


class PartsResponse(_Frozen):
    parts: int = 0
    cost: float = 0.0
    currency: str = ""
    encoding: str = ""
    characters: int = 0
    message: str = ""


class ErrorEnvelope(_Frozen):
    error: str = ""
