"""Version discovery endpoints for the mobile app.

Both routes are exempt from gating so that an outdated client can
always find out which version it needs.
"""
from __future__ import annotations

from fastapi import APIRouter, Request

from src.shared.constants import UNKNOWN_VERSION
from src.shared.errors import UpdateRequiredError
from src.shared.models.app_version import (
    AppVersionInfo,
    AppVersionResponse,
    UpdateRequiredResponse,
)

router = APIRouter(prefix="/api/app", tags=["app"])


def _update_message(minimum_version: str) -> str:
    return (
        "⚠️ UPDATE REQUIRED ⚠️\n\n"
        "Your app version is outdated and no longer supported.\n\n"
        f"Please update to version {minimum_version} or later to continue using BUZZNOB.\n\n"
        "To update:\n"
        "1. Open your App Store (iOS) or Play Store (Android)\n"
        '2. Search for "BUZZNOB"\n'
        '3. Tap "Update" or "Install"\n\n'
        "The app will not work until you update."
    )


@router.get("/version", response_model=AppVersionResponse)
async def get_app_version(request: Request) -> AppVersionResponse:
    """Return the minimum and latest app versions."""
    settings = request.app.state.settings
    gate = request.app.state.gate
    return AppVersionResponse(
        data=AppVersionInfo(
            minimum_required_version=gate.config.minimum_version.raw,
            latest_version=settings.latest_app_version,
            app_store_urls=gate.config.app_store_urls,
            update_required=settings.update_required,
        )
    )


@router.get("/update-required")
async def update_required(request: Request) -> None:
    """Always answer 426 with a human-readable update notice.

    Old clients without a forced-update screen call this to show the
    message verbatim.
    """
    gate = request.app.state.gate
    settings = request.app.state.settings
    minimum = gate.config.minimum_version.raw
    reported = request.headers.get(settings.version_header)
    if reported is not None:
        reported = reported.strip() or UNKNOWN_VERSION

    body = UpdateRequiredResponse(
        message=_update_message(minimum),
        minimum_version=minimum,
        current_version=reported,
        app_store_urls=gate.config.app_store_urls,
    )
    raise UpdateRequiredError(payload=body.to_payload())
