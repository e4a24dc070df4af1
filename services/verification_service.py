"""
Verification service: the submit/check flow behind the HTTP routes.

submit():          captcha check → verified-set update (faults propagate)
notify_verified(): best-effort bot message, run after the response
is_verified():     verified-set lookup
"""

from __future__ import annotations

from infrastructure.captcha.protocol import CaptchaProvider, CaptchaResult
from infrastructure.messaging.protocol import Notifier
from infrastructure.storage.verified_store import VerifiedStore
from shared.logging import get_logger

log = get_logger(__name__)

DEFAULT_SUCCESS_MESSAGE = "✅ Verification successful. You may now continue in the bot."


class VerificationService:
    def __init__(
        self,
        captcha: CaptchaProvider,
        store: VerifiedStore,
        notifier: Notifier,
        success_message: str = DEFAULT_SUCCESS_MESSAGE,
    ) -> None:
        self._captcha = captcha
        self._store = store
        self._notifier = notifier
        self._success_message = success_message

    async def submit(self, token: str, user_id: str) -> CaptchaResult:
        """Check *token* and, when it passes, record *user_id* as verified.

        Raises UpstreamServiceError / StorageError on internal faults; a
        rejected token is returned as an unsuccessful CaptchaResult.
        """
        result = await self._captcha.verify(token)
        if not result.success:
            return result

        self._store.mark_verified(user_id)
        log.info("user_verified", user_id=user_id)
        return result

    async def notify_verified(self, user_id: str) -> None:
        try:
            sent = await self._notifier.notify(user_id, self._success_message)
        except Exception as e:
            # Notifier implementations already swallow their own errors
            log.error(
                "verification_notice_failed",
                user_id=user_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return
        if not sent:
            log.warning("verification_notice_not_delivered", user_id=user_id)

    def is_verified(self, user_id: str) -> bool:
        return self._store.is_verified(user_id)
