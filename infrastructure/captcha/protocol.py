"""CaptchaProvider protocol — services depend on this, not the concrete implementation."""

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class CaptchaResult:
    success: bool
    error_codes: list[str] = field(default_factory=list)


class CaptchaProvider(Protocol):
    async def verify(self, token: str) -> CaptchaResult: ...
