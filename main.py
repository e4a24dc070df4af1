"""
Process entry point: validate configuration, then serve with uvicorn.

Exits with status 1 when RECAPTCHA_SECRET or BOT_TOKEN is missing.
"""

import sys

import uvicorn
from pydantic import ValidationError

from app import create_app
from config import AppSettings
from shared.logging import get_logger

log = get_logger(__name__)


def main() -> None:
    try:
        settings = AppSettings()
    except ValidationError as e:
        missing = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        log.error("missing_required_configuration", fields=missing)
        sys.exit(1)

    app = create_app(settings)
    log.info("server_starting", host=settings.host, port=settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
