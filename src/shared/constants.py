"""Shared constants used across the service."""
from __future__ import annotations

# Application version
VERSION: str = "1.0.0"

# Service name
VERSION_GATE_SERVICE_NAME: str = "version-gate"

# Port numbers
VERSION_GATE_PORT: int = 8000

# Header carrying the client app version
APP_VERSION_HEADER: str = "X-App-Version"

# App version defaults
DEFAULT_MINIMUM_APP_VERSION: str = "1.0.6"
DEFAULT_LATEST_APP_VERSION: str = "1.0.7"

# Clients built before version reporting existed are let through while the
# minimum stays at or below this version.
DEFAULT_TRANSITION_MAX_VERSION: str = "1.0.4"

# App store listings
IOS_APP_STORE_URL: str = "https://apps.apple.com/app/buzznob/id123456789"
ANDROID_APP_STORE_URL: str = (
    "https://play.google.com/store/apps/details?id=com.buzznob.mobile"
)

# Paths reachable by any client, listed for both the root-mounted (/api/...)
# and the sub-mounted form.
DEFAULT_EXEMPT_PATHS: list[str] = [
    "/health",
    "/api/health",
    "/app/version",
    "/api/app/version",
    "/app/update-required",
    "/api/app/update-required",
    "/auth",
    "/auth/*",
    "/api/auth",
    "/api/auth/*",
    "/referrals/code/*",
    "/api/referrals/code/*",
    "/auth/check-username",
    "/api/auth/check-username",
    "/users/check-username",
    "/api/users/check-username",
]

# Value reported when a request carries no version header
UNKNOWN_VERSION: str = "unknown"
