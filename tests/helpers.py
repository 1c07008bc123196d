from __future__ import annotations

import json
from typing import Callable

import httpx

ALERT_OK = {
    "message_id": "123e4567-e89b-12d3-a456-426614174000",
    "parts": 1,
    "cost": 0.025,
    "currency": "USD",
    "encoding": "GSM-7",
    "characters": 24,
}

PARTS_OK = {
    "parts": 1,
    "cost": 0.025,
    "currency": "USD",
    "encoding": "GSM-7",
    "characters": 24,
    "message": "Notifox: Test message",
}

BASE_URL = "http://notifox.test"


class RecordingHandler:
    """MockTransport handler that replays scripted responses and records requests.

    The last scripted response repeats once the script runs out.
    """

    def __init__(self, responses: list[httpx.Response] | Callable[[httpx.Request], httpx.Response]) -> None:
        self._responses = responses
        self.requests: list[httpx.Request] = []

    @property
    def count(self) -> int:
        return len(self.requests)

    def bodies(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if callable(self._responses):
            return self._responses(request)
        index = min(len(self.requests), len(self._responses)) - 1
        return self._responses[index]


def fail_on_call(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected network call to {request.url}")
