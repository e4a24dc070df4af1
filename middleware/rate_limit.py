"""
Rate-limit gate in front of every route, including unknown paths.

Reads the limiter and the proxy-trust flag from app.state so tests can swap
them per app instance. Rejected requests never reach routing.
"""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from errors import RateLimitError
from shared.ip_utils import get_client_ip
from shared.logging import get_logger, hash_ip

log = get_logger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        state = request.app.state
        client_ip = get_client_ip(
            request, trust_proxy_headers=state.settings.trust_proxy_headers
        )
        if not state.rate_limiter.allow(client_ip):
            log.info(
                "rate_limit_exceeded",
                ip_hash=hash_ip(client_ip),
                path=request.url.path,
            )
            exc = RateLimitError("Too many requests")
            return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
        return await call_next(request)
