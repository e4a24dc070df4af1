"""
Shared test configuration.

Every test runs from its own tmp_path so pydantic-settings never reads the
project's real .env file and the default verified.json lands in a scratch
directory. Tests control config through monkeypatch.setenv() or explicit
AppSettings(...) keyword arguments.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from config import AppSettings
from infrastructure.captcha.protocol import CaptchaResult

_CONFIG_ENV_VARS = (
    "RECAPTCHA_SECRET",
    "BOT_TOKEN",
    "PORT",
    "ENV",
    "VERIFIED_FILE",
    "TRUST_PROXY_HEADERS",
    "RATE_LIMIT_WINDOW_SECONDS",
    "RATE_LIMIT_MAX_REQUESTS",
    "SENTRY_DSN",
)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for var in _CONFIG_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def verified_file(tmp_path):
    return tmp_path / "verified.json"


@pytest.fixture
def settings(verified_file):
    return AppSettings(
        recaptcha_secret="test-secret",
        bot_token="123:test-bot-token",
        verified_file=str(verified_file),
    )


@pytest.fixture
def captcha():
    """CaptchaProvider double that accepts every token."""
    provider = MagicMock()
    provider.verify = AsyncMock(return_value=CaptchaResult(success=True))
    return provider


@pytest.fixture
def notifier():
    """Notifier double that reports successful delivery."""
    provider = MagicMock()
    provider.notify = AsyncMock(return_value=True)
    return provider
