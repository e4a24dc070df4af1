"""
Response DTOs for verification endpoints.

VerifyResponse — POST /verify (200)
CheckResponse  — GET /check   (200)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class VerifyResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool


class CheckResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    verified: bool
