"""
Centralized logging for the verification relay.

Structured logging with:
- JSON formatting for production, pretty console for development
- Redaction of secrets and CAPTCHA tokens
- IP hashing in production

setup_logging() is called once from create_app(); modules obtain loggers
with get_logger(__name__) at import time.
"""

from __future__ import annotations

import hashlib
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.types import EventDict, Processor

from config import LoggingSettings

# Sensitive fields to redact from logs
REDACTED_FIELDS = {
    "password",
    "token",
    "api_key",
    "authorization",
    "cookie",
    "secret",
    "bot_token",
    "recaptcha_secret",
}

_SENSITIVE_FRAGMENTS = ("password", "token", "secret", "key")
_PROTECTED_KEYS = {"level", "event", "timestamp", "logger"}

_hash_ips = False


def get_logger(name: str) -> BoundLogger:
    """
    Get a configured logger instance.

    Example:
        >>> log = get_logger(__name__)
        >>> log.info("verification_succeeded", user_id="42")
    """
    return structlog.get_logger(name)


def hash_ip(ip_address: Optional[str]) -> Optional[str]:
    """
    Hash an IP address for privacy in production.

    Returns the first 16 hex chars of its SHA-256 in production and the
    address unchanged otherwise. None passes through.
    """
    if ip_address is None:
        return None
    if _hash_ips and ip_address:
        return hashlib.sha256(ip_address.encode()).hexdigest()[:16]
    return ip_address


def add_timestamp(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add ISO format timestamp to event dict."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def redact_sensitive_fields(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Redact sensitive fields from logs."""
    for key in list(event_dict.keys()):
        if key in _PROTECTED_KEYS:
            continue
        lowered = key.lower()
        if lowered in REDACTED_FIELDS or any(
            fragment in lowered for fragment in _SENSITIVE_FRAGMENTS
        ):
            event_dict[key] = "***REDACTED***"
    return event_dict


def configure_structlog(log_format: str) -> None:
    """
    Configure structlog with appropriate processors for the environment.

    json:    one JSON object per line, for log shippers
    console: coloured key=value output for local development
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_timestamp,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        redact_sensitive_fields,
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            pad_event=15,
            sort_keys=False,
        )

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_stdlib_logging(log_level: str) -> None:
    """Route stdlib logging to stdout and quiet noisy third-party loggers."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def setup_logging(settings: LoggingSettings, *, production: bool = False) -> None:
    """
    Initialize logging system for the application.

    Should be called early in application startup (in create_app()).
    """
    global _hash_ips
    _hash_ips = production

    configure_stdlib_logging(settings.log_level)
    configure_structlog(settings.log_format)

    get_logger(__name__).info(
        "logging_initialized",
        log_level=settings.log_level,
        log_format=settings.log_format,
        production=production,
    )


__all__ = [
    "get_logger",
    "hash_ip",
    "redact_sensitive_fields",
    "configure_structlog",
    "setup_logging",
]
