"""Client-facing app version payloads.

Field names are camelCase on the wire because the mobile clients read
them directly; Python code uses the snake_case attribute names.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class AppStoreUrls(BaseModel):
    """Store listings the client links to when an update is needed."""
    ios: str
    android: str

    model_config = {"frozen": True}


class UpdateRequiredResponse(BaseModel):
    """Body of an HTTP 426 response."""
    success: bool = False
    error: str = "APP_UPDATE_REQUIRED"
    message: str
    code: str = "UPDATE_REQUIRED"
    minimum_version: str = Field(..., alias="minimumVersion")
    current_version: str | None = Field(default=None, alias="currentVersion")
    app_store_urls: AppStoreUrls = Field(..., alias="appStoreUrls")

    model_config = {"populate_by_name": True}

    def to_payload(self) -> dict[str, Any]:
        """Dump with wire names, leaving out ``currentVersion`` when unset."""
        return self.model_dump(by_alias=True, exclude_none=True)


class AppVersionInfo(BaseModel):
    """Version discovery data served to clients on startup."""
    minimum_required_version: str = Field(..., alias="minimumRequiredVersion")
    latest_version: str = Field(..., alias="latestVersion")
    app_store_urls: AppStoreUrls = Field(..., alias="appStoreUrls")
    update_required: bool = Field(default=True, alias="updateRequired")

    model_config = {"populate_by_name": True}


class AppVersionResponse(BaseModel):
    """Envelope for the version discovery endpoint."""
    success: bool = True
    data: AppVersionInfo
