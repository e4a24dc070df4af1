"""In-memory sliding-window rate limiter keyed by caller (usually client IP).

State lives in the process only and resets on restart. allow() never awaits,
so on a single event loop each check-and-record runs without interleaving.
"""

from __future__ import annotations

import time
from collections import deque
from typing import Callable, Deque, Dict


class SlidingWindowRateLimiter:
    """Per-caller request counter over a trailing time window.

    Every call is recorded, including rejected ones, so a caller that keeps
    hammering stays blocked until it backs off for a full window.
    """

    def __init__(
        self,
        *,
        max_requests: int = 10,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_requests = max_requests
        self._window = window_seconds
        self._clock = clock
        self._events: Dict[str, Deque[float]] = {}

    @property
    def tracked_callers(self) -> int:
        return len(self._events)

    def _prune(self, events: Deque[float], now: float) -> None:
        while events and now - events[0] >= self._window:
            events.popleft()

    def allow(self, caller: str) -> bool:
        now = self._clock()
        events = self._events.setdefault(caller, deque())
        self._prune(events, now)
        events.append(now)
        return len(events) <= self._max_requests

    def sweep(self) -> int:
        """Forget callers with no request inside the window. Returns how many."""
        now = self._clock()
        idle = []
        for caller, events in self._events.items():
            self._prune(events, now)
            if not events:
                idle.append(caller)
        for caller in idle:
            del self._events[caller]
        return len(idle)

    def reset(self) -> None:
        self._events.clear()
