"""
FastAPI application factory.
create_app() is the single entry point for building the app.
"""

from __future__ import annotations

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import sentry_sdk
from fastapi import FastAPI

from config import AppSettings
from errors import register_error_handlers
from infrastructure.captcha.protocol import CaptchaProvider
from infrastructure.captcha.recaptcha import RecaptchaProvider
from infrastructure.http_client import HttpClient
from infrastructure.messaging.protocol import Notifier
from infrastructure.messaging.telegram import TelegramNotifier
from infrastructure.rate_limiter import SlidingWindowRateLimiter
from infrastructure.storage.verified_store import VerifiedStore
from middleware.rate_limit import RateLimitMiddleware
from routes.health_routes import router as health_router
from routes.verification_routes import router as verification_router
from services.verification_service import VerificationService
from shared.logging import get_logger, setup_logging

log = get_logger(__name__)


async def _sweep_idle_callers(
    limiter: SlidingWindowRateLimiter, interval_seconds: float
) -> None:
    while True:
        await asyncio.sleep(interval_seconds)
        removed = limiter.sweep()
        if removed:
            log.debug(
                "rate_limiter_swept",
                removed=removed,
                tracked_callers=limiter.tracked_callers,
            )


def create_app(
    settings: Optional[AppSettings] = None,
    *,
    captcha: Optional[CaptchaProvider] = None,
    notifier: Optional[Notifier] = None,
) -> FastAPI:
    """Create and return a fully configured FastAPI application.

    ``captcha`` and ``notifier`` replace the reCAPTCHA / Telegram clients,
    mainly for tests.
    """
    if settings is None:
        settings = AppSettings()

    setup_logging(settings.logging, production=settings.is_production)

    # Initialise Sentry before anything else so it captures startup errors
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # ── Startup ──────────────────────────────────────────────────────────
        http_client = HttpClient(timeout=settings.http_timeout_seconds)

        store = VerifiedStore(settings.verified_file)
        store.ensure_exists()

        service = VerificationService(
            captcha=captcha
            or RecaptchaProvider(
                secret=settings.recaptcha_secret,
                http_client=http_client,
                verify_url=settings.captcha_verify_url,
            ),
            store=store,
            notifier=notifier
            or TelegramNotifier(
                bot_token=settings.bot_token,
                http_client=http_client,
                api_url=settings.telegram_api_url,
            ),
            success_message=settings.success_message,
        )

        app.state.verified_store = store
        app.state.verification_service = service

        sweeper = asyncio.create_task(
            _sweep_idle_callers(
                app.state.rate_limiter,
                settings.rate_limit.rate_limit_sweep_interval_seconds,
            )
        )
        log.info("app_started", verified_file=settings.verified_file)

        yield

        # ── Shutdown ─────────────────────────────────────────────────────────
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper
        await http_client.aclose()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.docs_url else None,
        lifespan=lifespan,
    )

    # Needed by the middleware even before the lifespan has run
    app.state.settings = settings
    app.state.rate_limiter = SlidingWindowRateLimiter(
        max_requests=settings.rate_limit.rate_limit_max_requests,
        window_seconds=settings.rate_limit.rate_limit_window_seconds,
    )

    app.add_middleware(RateLimitMiddleware)

    register_error_handlers(app)
    app.include_router(verification_router)
    app.include_router(health_router)

    return app
