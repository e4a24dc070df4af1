"""Notifier protocol — services depend on this, not the concrete implementation."""

from typing import Protocol


class Notifier(Protocol):
    async def notify(self, user_id: str, text: str) -> bool: ...
