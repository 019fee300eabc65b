"""Custom exception classes and FastAPI exception handlers."""
from __future__ import annotations

from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from starlette.requests import Request


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str, status_code: int = 500) -> None:
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)

    def to_content(self) -> dict[str, Any]:
        """Return the JSON body rendered for this error."""
        return {"detail": self.detail}


class UpdateRequiredError(AppError):
    """Client app must be updated (426).

    Carries the full client-facing payload; the handler renders it as-is.
    """

    def __init__(
        self,
        payload: dict[str, Any],
        detail: str = "App update required",
    ) -> None:
        super().__init__(detail=detail, status_code=426)
        self.payload = payload

    def to_content(self) -> dict[str, Any]:
        return self.payload


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with a FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_content(),
        )
