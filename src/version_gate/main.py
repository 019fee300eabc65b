"""Version Gate FastAPI application."""
from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from src.shared.config import VersionGateConfig
from src.shared.constants import VERSION, VERSION_GATE_PORT, VERSION_GATE_SERVICE_NAME
from src.shared.errors import register_exception_handlers
from src.shared.logging import TraceIDMiddleware, setup_logging
from src.version_gate.middleware import VersionGateMiddleware
from src.version_gate.policy import GateConfig, GateObserver, VersionGate
from src.version_gate.routers.app_version import router as app_version_router
from src.version_gate.routers.health import router as health_router


def create_app(
    config: VersionGateConfig | None = None,
    observer: GateObserver | None = None,
) -> FastAPI:
    """Build the service around one immutable gate configuration."""
    config = config or VersionGateConfig()
    logger = setup_logging(VERSION_GATE_SERVICE_NAME, config.log_level)
    gate = VersionGate(GateConfig.from_settings(config), observer=observer)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan - record start time and log service state."""
        app.state.start_time = time.time()
        logger.info(
            "Service started: name=%s version=%s port=%d minimum_app_version=%s",
            VERSION_GATE_SERVICE_NAME, VERSION, VERSION_GATE_PORT,
            gate.config.minimum_version.raw,
        )
        yield
        logger.info("Service stopped: name=%s", VERSION_GATE_SERVICE_NAME)

    app = FastAPI(
        title="Version Gate",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.gate = gate

    # Last added runs first: trace ids are set before the gate logs.
    app.add_middleware(VersionGateMiddleware, gate=gate, header_name=config.version_header)
    app.add_middleware(TraceIDMiddleware)
    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(app_version_router)
    return app


app = create_app()
