"""reCAPTCHA implementation of CaptchaProvider.

Works against any ``siteverify``-compatible endpoint (reCAPTCHA, hCaptcha,
Turnstile): form-encoded ``secret`` + ``response``, JSON
``{"success": bool, "error-codes": [...]}`` back.

A rejection by the service is a normal CaptchaResult. Not being able to ask
(transport error, non-2xx, unparseable body) raises UpstreamServiceError.
"""

import httpx

from errors import UpstreamServiceError
from infrastructure.captcha.protocol import CaptchaResult
from infrastructure.http_client import HttpClient
from shared.logging import get_logger

log = get_logger(__name__)

RECAPTCHA_VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"


class RecaptchaProvider:
    def __init__(
        self,
        secret: str,
        http_client: HttpClient,
        verify_url: str = RECAPTCHA_VERIFY_URL,
    ) -> None:
        self._secret = secret
        self._http = http_client
        self._verify_url = verify_url

    async def verify(self, token: str) -> CaptchaResult:
        try:
            response = await self._http.post(
                self._verify_url,
                data={"secret": self._secret, "response": token},
            )
        except httpx.HTTPError as e:
            log.error(
                "captcha_request_failed", error=str(e), error_type=type(e).__name__
            )
            raise UpstreamServiceError("CAPTCHA service unreachable") from e

        if not 200 <= response.status_code < 300:
            log.error(
                "captcha_api_error",
                status_code=response.status_code,
                response_text=response.text[:200],
            )
            raise UpstreamServiceError("CAPTCHA service returned an error")

        try:
            data = response.json()
        except ValueError as e:
            log.error("captcha_response_not_json", response_text=response.text[:200])
            raise UpstreamServiceError("CAPTCHA service returned invalid JSON") from e

        if not isinstance(data, dict):
            log.error("captcha_response_malformed", body_type=type(data).__name__)
            raise UpstreamServiceError("CAPTCHA service returned invalid JSON")

        success = data.get("success") is True
        error_codes = [] if success else list(data.get("error-codes") or [])
        if not success:
            log.info("captcha_verification_failed", error_codes=error_codes)
        return CaptchaResult(success=success, error_codes=error_codes)
