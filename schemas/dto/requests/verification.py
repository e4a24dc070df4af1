"""
Request DTOs for verification endpoints.

VerifyRequest  POST /verify

Fields are typed ``Any`` on purpose: wrong types must produce the
endpoint's own 400 envelope, not FastAPI's 422, so the route validates
them with shared.validators.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class VerifyRequest(BaseModel):
    """Request body for POST /verify. ``userId`` is the wire name."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    token: Any = None
    user_id: Any = Field(default=None, alias="userId")
