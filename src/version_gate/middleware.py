"""Starlette middleware that applies the version gate to every request."""
from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from src.shared.constants import APP_VERSION_HEADER
from src.version_gate.policy import RequestContext, VersionGate

UPGRADE_REQUIRED_STATUS = 426


class VersionGateMiddleware(BaseHTTPMiddleware):
    """Rejects requests from outdated app versions with HTTP 426."""

    def __init__(
        self,
        app: ASGIApp,
        gate: VersionGate,
        header_name: str = APP_VERSION_HEADER,
    ) -> None:
        super().__init__(app)
        self.gate = gate
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        # CORS preflight never carries app headers
        if request.method == "OPTIONS":
            return await call_next(request)

        context = RequestContext(
            method=request.method,
            path=request.url.path,
            client_version=request.headers.get(self.header_name),
        )
        decision = self.gate.decide(context)
        if not decision.allowed:
            return JSONResponse(
                status_code=UPGRADE_REQUIRED_STATUS,
                content=self.gate.rejection_body(decision),
            )
        return await call_next(request)
