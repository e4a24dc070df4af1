"""
Verification record persisted in the verified-set file.

One record per user id. The file holds a JSON object keyed by user id:

    {"42": {"verified": true, "timestamp": 1700000000000}}

A record only exists once the user passed verification; there are no
"failed" records.
"""

from __future__ import annotations

import time
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


class VerificationRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    verified: bool = Field(default=True, strict=True)
    timestamp: int = Field(default_factory=now_ms)

    @classmethod
    def fresh(cls, timestamp: Optional[int] = None) -> "VerificationRecord":
        return cls(verified=True, timestamp=now_ms() if timestamp is None else timestamp)
