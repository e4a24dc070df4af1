"""
Health check endpoint.

GET /health — checks that the verified-set file is readable and writable.
Rules:
- Store unusable → "unhealthy" (503) — /verify cannot record anything.
- Otherwise → "healthy" (200).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from dependencies import get_verified_store
from infrastructure.storage.verified_store import VerifiedStore
from schemas.dto.responses.common import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def health_check(
    store: VerifiedStore = Depends(get_verified_store),
) -> JSONResponse:
    checks: dict[str, str] = {}
    overall = "healthy"

    try:
        checks["store"] = "ok" if store.is_healthy() else "error"
    except Exception:
        checks["store"] = "error"

    if checks["store"] != "ok":
        overall = "unhealthy"

    status_code = 503 if overall == "unhealthy" else 200
    return JSONResponse(
        status_code=status_code,
        content={"status": overall, "checks": checks},
    )
