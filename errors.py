"""
Application error hierarchy and FastAPI exception handlers.

AppError is the base for all typed errors. The global exception handler
converts AppError subclasses to JSON responses using to_dict(), so each
endpoint family can keep its own response envelope:

- generic errors          {"error": ...}
- POST /verify errors     {"success": false, "message": ..., ["errors": [...]]}
- GET /check errors       {"verified": false}

Non-AppError exceptions become a generic 500 and are logged.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.logging import get_logger

log = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class AppError(Exception):
    """Base application error. All typed errors inherit from this."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(AppError):
    status_code = 400
    error_code = "validation_error"


class RateLimitError(AppError):
    status_code = 429
    error_code = "rate_limit_exceeded"


class UpstreamServiceError(AppError):
    """The CAPTCHA verification service could not be reached or answered garbage."""

    status_code = 500
    error_code = "upstream_error"


class StorageError(AppError):
    """The verified-set file could not be written."""

    status_code = 500
    error_code = "storage_error"


# ── POST /verify envelopes ───────────────────────────────────────────────────


class InvalidSubmissionError(ValidationError):
    def to_dict(self) -> dict:
        return {"success": False, "message": self.message}


class VerificationFailedError(AppError):
    """The verification service rejected the token. details = its error codes."""

    status_code = 400
    error_code = "verification_failed"

    def to_dict(self) -> dict:
        return {
            "success": False,
            "message": self.message,
            "errors": list(self.details or []),
        }


class SubmissionFaultError(AppError):
    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE) -> None:
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"success": False, "message": self.message}


# ── GET /check envelopes ─────────────────────────────────────────────────────


class InvalidQueryError(ValidationError):
    def to_dict(self) -> dict:
        return {"verified": False}


class LookupFaultError(AppError):
    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE) -> None:
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"verified": False}


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        # Unknown paths and known paths with the wrong method are both "no route"
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"error": "Not found"})
        return JSONResponse(
            status_code=exc.status_code, content={"error": str(exc.detail)}
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        # Sentry integration: if sentry_sdk is initialized it will auto-capture
        # unhandled exceptions before this handler fires.
        log.error(
            "unhandled_exception",
            path=request.url.path,
            error_type=type(exc).__name__,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )
