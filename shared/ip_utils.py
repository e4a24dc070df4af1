"""
Client IP resolution for FastAPI/Starlette requests.

The IP is the rate-limit bucket key, so proxy headers are only consulted
when the deployment says a trusted proxy sits in front of the app;
otherwise any caller could pick its own bucket.
"""

from __future__ import annotations

from starlette.requests import Request

_PROXY_HEADERS: tuple[str, ...] = (
    "CF-Connecting-IP",
    "True-Client-IP",
    "X-Forwarded-For",
    "X-Real-IP",
    "X-Client-IP",
)


def get_client_ip(request: Request, trust_proxy_headers: bool = False) -> str:
    """Extract the client IP from a ``Request``.

    With ``trust_proxy_headers`` set, checks proxy headers in priority order
    before falling back to the direct connection address:

    1. ``CF-Connecting-IP`` — Cloudflare
    2. ``True-Client-IP`` — Akamai and others
    3. ``X-Forwarded-For`` — standard proxy header (first IP in list)
    4. ``X-Real-IP`` — nginx / other reverse proxies
    5. ``X-Client-IP`` — less common

    Returns:
        The resolved client IP string, or ``""`` if none can be found.
    """
    if trust_proxy_headers:
        for header in _PROXY_HEADERS:
            ip_value: str | None = request.headers.get(header)
            if ip_value:
                client_ip: str = ip_value.split(",")[0].strip()
                if client_ip:
                    return client_ip

    return request.client.host if request.client else ""
