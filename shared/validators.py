"""
Input validators: framework-agnostic, pure functions.
"""

from __future__ import annotations

import re
from typing import Any, Optional

# ASCII digits only; str.isdigit() and \d also accept other Unicode digits
_USER_ID_RE = re.compile(r"[0-9]+")


def normalize_user_id(value: Any) -> Optional[str]:
    """Return *value* as a canonical user-id string, or None if it is not one.

    Accepts strings made only of ASCII digits and non-negative integers
    (JSON clients often send numeric chat ids). Booleans, floats, empty
    strings and anything else are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        value = str(value)
    if not isinstance(value, str):
        return None
    if not _USER_ID_RE.fullmatch(value):
        return None
    return value


def validate_user_id(value: Any) -> bool:
    """Return True if *value* is an all-digits user identifier."""
    return normalize_user_id(value) is not None


def validate_token(value: Any) -> bool:
    """Return True if *value* is a non-empty CAPTCHA token string."""
    return isinstance(value, str) and len(value) > 0
