"""
Verification endpoints.

POST /verify — check a CAPTCHA token and mark a user id as verified
GET  /check  — ask whether a user id is verified

Both are rate limited by RateLimitMiddleware before they run.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request

from dependencies import get_verification_service
from errors import (
    InvalidQueryError,
    InvalidSubmissionError,
    LookupFaultError,
    SubmissionFaultError,
    VerificationFailedError,
)
from schemas.dto.requests.verification import VerifyRequest
from schemas.dto.responses.common import ErrorResponse, SubmissionError
from schemas.dto.responses.verification import CheckResponse, VerifyResponse
from services.verification_service import VerificationService
from shared.logging import get_logger
from shared.validators import normalize_user_id, validate_token

log = get_logger(__name__)

router = APIRouter(tags=["verification"])


async def _read_json_object(request: Request) -> dict[str, Any]:
    """Request body as a dict; anything that is not a JSON object reads as {}."""
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


@router.post(
    "/verify",
    response_model=VerifyResponse,
    responses={
        400: {"model": SubmissionError},
        429: {"model": ErrorResponse},
        500: {"model": SubmissionError},
    },
)
async def submit_verification(
    request: Request,
    background_tasks: BackgroundTasks,
    service: VerificationService = Depends(get_verification_service),
) -> VerifyResponse:
    body = VerifyRequest.model_validate(await _read_json_object(request))

    if not validate_token(body.token):
        raise InvalidSubmissionError("Invalid token")

    user_id = normalize_user_id(body.user_id)
    if user_id is None:
        raise InvalidSubmissionError("Invalid user ID")

    try:
        result = await service.submit(body.token, user_id)
    except Exception as e:
        log.error(
            "verification_error",
            user_id=user_id,
            error=str(e),
            error_type=type(e).__name__,
            exc_info=e,
        )
        raise SubmissionFaultError() from e

    if not result.success:
        raise VerificationFailedError("Verification failed", details=result.error_codes)

    # Runs after the response is sent; its outcome never changes the status
    background_tasks.add_task(service.notify_verified, user_id)
    return VerifyResponse(success=True)


@router.get(
    "/check",
    response_model=CheckResponse,
    responses={
        400: {"model": CheckResponse},
        429: {"model": ErrorResponse},
        500: {"model": CheckResponse},
    },
)
async def check_verification(
    uid: Optional[str] = Query(default=None),
    service: VerificationService = Depends(get_verification_service),
) -> CheckResponse:
    user_id = normalize_user_id(uid)
    if user_id is None:
        raise InvalidQueryError("Invalid user ID")

    try:
        verified = service.is_verified(user_id)
    except Exception as e:
        log.error(
            "check_error",
            user_id=user_id,
            error=str(e),
            error_type=type(e).__name__,
            exc_info=e,
        )
        raise LookupFaultError() from e

    return CheckResponse(verified=verified)
