"""
Common response DTOs shared across multiple endpoints.

ErrorResponse       — generic {error} shape (404, 429, 500)
SubmissionError     — {success, message, errors?} shape from POST /verify
HealthResponse      — GET /health
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """Generic error JSON body produced by the AppError exception handler."""

    model_config = ConfigDict(populate_by_name=True)

    error: str


class SubmissionError(BaseModel):
    """Error body for POST /verify; ``errors`` carries upstream error codes."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = False
    message: str
    errors: Optional[list[str]] = None


class HealthResponse(BaseModel):
    """Response body for GET /health."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    checks: dict[str, str]
