"""Telegram Bot API implementation of Notifier.

Delivery is best-effort: every failure is logged and reported as False,
nothing is raised to the caller.
"""

from infrastructure.http_client import HttpClient
from shared.logging import get_logger

log = get_logger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org"


class TelegramNotifier:
    def __init__(
        self,
        bot_token: str,
        http_client: HttpClient,
        api_url: str = TELEGRAM_API_URL,
    ) -> None:
        self._bot_token = bot_token
        self._http = http_client
        self._api_url = api_url.rstrip("/")

    @property
    def _send_message_url(self) -> str:
        return f"{self._api_url}/bot{self._bot_token}/sendMessage"

    async def notify(self, user_id: str, text: str) -> bool:
        try:
            response = await self._http.post(
                self._send_message_url,
                json={"chat_id": user_id, "text": text},
            )
            if 200 <= response.status_code < 300:
                return True
            log.warning(
                "telegram_send_failed",
                user_id=user_id,
                status_code=response.status_code,
                response_text=response.text[:200],
            )
            return False
        except Exception as e:
            log.error(
                "telegram_request_failed",
                user_id=user_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False
