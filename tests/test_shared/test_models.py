"""Tests for the Pydantic data models."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.shared.models.app_version import (
    AppStoreUrls,
    AppVersionInfo,
    AppVersionResponse,
    UpdateRequiredResponse,
)
from src.shared.models.common import HealthStatus


@pytest.fixture
def urls() -> AppStoreUrls:
    return AppStoreUrls(ios="https://ios.example", android="https://android.example")


class TestHealthStatus:
    def test_defaults(self):
        status = HealthStatus(service_name="version-gate", version="1.0.0", uptime_seconds=1.5)
        assert status.status == "healthy"
        assert status.environment == "development"
        assert status.details == {}
        assert status.timestamp.tzinfo is not None

    def test_invalid_status_rejected(self):
        with pytest.raises(ValidationError):
            HealthStatus(status="ok", service_name="x", version="1", uptime_seconds=0)


class TestAppStoreUrls:
    def test_frozen(self, urls):
        with pytest.raises(ValidationError):
            urls.ios = "https://elsewhere"


class TestUpdateRequiredResponse:
    def test_wire_names(self, urls):
        body = UpdateRequiredResponse(
            message="update",
            minimum_version="1.0.6",
            current_version="1.0.5",
            app_store_urls=urls,
        )
        assert body.to_payload() == {
            "success": False,
            "error": "APP_UPDATE_REQUIRED",
            "message": "update",
            "code": "UPDATE_REQUIRED",
            "minimumVersion": "1.0.6",
            "currentVersion": "1.0.5",
            "appStoreUrls": {"ios": "https://ios.example", "android": "https://android.example"},
        }

    def test_current_version_omitted_when_unset(self, urls):
        body = UpdateRequiredResponse(message="m", minimum_version="1.0.6", app_store_urls=urls)
        assert "currentVersion" not in body.to_payload()

    def test_accepts_wire_names(self, urls):
        body = UpdateRequiredResponse.model_validate({
            "message": "m",
            "minimumVersion": "2.0",
            "appStoreUrls": urls.model_dump(),
        })
        assert body.minimum_version == "2.0"

    def test_message_required(self, urls):
        with pytest.raises(ValidationError):
            UpdateRequiredResponse(minimum_version="1.0.6", app_store_urls=urls)


class TestAppVersionResponse:
    def test_dump_by_alias(self, urls):
        resp = AppVersionResponse(
            data=AppVersionInfo(
                minimum_required_version="1.0.6",
                latest_version="1.0.7",
                app_store_urls=urls,
            )
        )
        dumped = resp.model_dump(by_alias=True)
        assert dumped["success"] is True
        assert dumped["data"]["minimumRequiredVersion"] == "1.0.6"
        assert dumped["data"]["latestVersion"] == "1.0.7"
        assert dumped["data"]["updateRequired"] is True
