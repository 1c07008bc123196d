from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def clear_notifox_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "NOTIFOX_API_KEY",
        "NOTIFOX_BASE_URL",
        "NOTIFOX_TIMEOUT_S",
        "NOTIFOX_MAX_RETRIES",
        "NOTIFOX_USER_AGENT",
        "NOTIFOX_LOG_LEVEL",
        "NOTIFOX_LOG_TO_FILE",
        "NOTIFOX_LOG_DIR",
        "NOTIFOX_LOG_MAX_BYTES",
        "NOTIFOX_LOG_BACKUP_COUNT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    delays: list[float] = []
    monkeypatch.setattr("notifox.client.time.sleep", lambda seconds: delays.append(seconds))
    return delays
