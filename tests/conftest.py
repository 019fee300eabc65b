"""Shared test fixtures for the version gate test suite."""
from __future__ import annotations

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from src.shared.config import VersionGateConfig
from src.version_gate.policy import GateConfig, GateEvent, VersionGate


class RecordingObserver:
    """Gate observer that keeps every event for assertions."""

    def __init__(self) -> None:
        self.events: list[GateEvent] = []

    def record(self, event: GateEvent) -> None:
        self.events.append(event)

    @property
    def rejects(self) -> list[GateEvent]:
        return [e for e in self.events if e.outcome.value == "reject"]


_GATE_ENV_VARS = (
    "MINIMUM_APP_VERSION",
    "LATEST_APP_VERSION",
    "TRANSITION_MAX_VERSION",
    "IOS_APP_STORE_URL",
    "ANDROID_APP_STORE_URL",
    "EXEMPT_PATHS",
    "VERSION_HEADER",
    "UPDATE_REQUIRED",
    "LOG_LEVEL",
    "ENVIRONMENT",
)


@pytest.fixture(autouse=True)
def clean_gate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host environment variables out of config defaults."""
    for name in _GATE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def gate_config() -> GateConfig:
    return GateConfig.build(minimum_version="1.0.6")


@pytest.fixture
def gate(gate_config: GateConfig, observer: RecordingObserver) -> VersionGate:
    return VersionGate(gate_config, observer=observer)


@pytest.fixture
def make_client(
    monkeypatch: pytest.MonkeyPatch, observer: RecordingObserver
) -> Generator:
    """Factory for a TestClient around an app built from env overrides."""
    from src.version_gate.main import create_app

    clients: list[TestClient] = []

    def _make(**env: str) -> TestClient:
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        app = create_app(VersionGateConfig(), observer=observer)

        @app.get("/api/articles")
        async def list_articles() -> dict:
            return {"success": True, "data": []}

        @app.get("/articles")
        async def list_articles_mounted() -> dict:
            return {"success": True, "data": []}

        @app.get("/api/referrals/code/{code}")
        async def lookup_referral(code: str) -> dict:
            return {"success": True, "code": code}

        @app.post("/api/auth/check-username")
        async def check_username() -> dict:
            return {"available": True}

        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
