"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).

RECAPTCHA_SECRET and BOT_TOKEN are required; AppSettings() raises a
pydantic ValidationError when either is missing or empty, which main.py
turns into an immediate exit.
"""

from __future__ import annotations

from typing import Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RateLimitSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    rate_limit_window_seconds: float = 60.0
    rate_limit_max_requests: int = 10
    # How often idle callers are dropped from the in-memory map
    rate_limit_sweep_interval_seconds: float = 60.0


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Secrets
    recaptcha_secret: str
    bot_token: str

    # Core
    env: str = "development"
    app_name: str = "captcha-relay"
    host: str = "0.0.0.0"
    port: int = 3000

    # OpenAPI docs URL (None disables the docs UI in production)
    docs_url: Optional[str] = None

    # Flat JSON file holding the verified set
    verified_file: str = "verified.json"

    # External service URLs
    captcha_verify_url: str = "https://www.google.com/recaptcha/api/siteverify"
    telegram_api_url: str = "https://api.telegram.org"
    http_timeout_seconds: float = 5.0

    success_message: str = (
        "✅ Verification successful. You may now continue in the bot."
    )

    # Only honour X-Forwarded-For & co. when running behind a known proxy
    trust_proxy_headers: bool = False

    # Sub-configs (composed via model_validator below)
    rate_limit: Optional[RateLimitSettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @field_validator("recaptcha_secret", "bot_token")
    @classmethod
    def _require_non_empty(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        if self.rate_limit is None:
            self.rate_limit = RateLimitSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()
        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
