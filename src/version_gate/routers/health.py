"""Health check endpoint for the version gate service."""
from __future__ import annotations

import time

from fastapi import APIRouter, Request

from src.shared.constants import VERSION, VERSION_GATE_SERVICE_NAME
from src.shared.models.common import HealthStatus

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthStatus)
@router.get("/api/health", response_model=HealthStatus)
async def health(request: Request) -> HealthStatus:
    """Health check endpoint."""
    state = request.app.state
    start_time = getattr(state, "start_time", time.time())
    gate = state.gate

    return HealthStatus(
        status="healthy",
        service_name=VERSION_GATE_SERVICE_NAME,
        version=VERSION,
        environment=state.settings.environment,
        uptime_seconds=time.time() - start_time,
        details={
            "minimum_app_version": gate.config.minimum_version.raw,
        },
    )
