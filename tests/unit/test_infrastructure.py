"""Unit tests for the outbound clients: HttpClient, reCAPTCHA, Telegram."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from errors import UpstreamServiceError
from infrastructure.captcha.recaptcha import RECAPTCHA_VERIFY_URL, RecaptchaProvider
from infrastructure.http_client import HttpClient
from infrastructure.messaging.telegram import TelegramNotifier


def _response(status_code=200, json_body=None, text=""):
    resp = MagicMock(status_code=status_code, text=text)
    resp.json.return_value = json_body
    return resp


# ── HttpClient ────────────────────────────────────────────────────────────────


class TestHttpClient:
    async def test_post_delegates_to_httpx(self, mocker):
        client = HttpClient()
        fake_resp = MagicMock(status_code=200)
        mocker.patch.object(client._client, "post", return_value=fake_resp)
        resp = await client.post("http://example.com")
        assert resp.status_code == 200
        await client.aclose()

    async def test_post_propagates_exception(self, mocker):
        client = HttpClient()
        mocker.patch.object(client._client, "post", side_effect=Exception("timeout"))
        with pytest.raises(Exception, match="timeout"):
            await client.post("http://example.com")
        await client.aclose()

    async def test_context_manager(self):
        async with HttpClient() as client:
            assert client is not None


# ── RecaptchaProvider ─────────────────────────────────────────────────────────


class TestRecaptchaProvider:
    def _make(self, secret="test-secret"):
        http = MagicMock()
        return RecaptchaProvider(secret=secret, http_client=http), http

    async def test_success(self):
        provider, http = self._make()
        http.post = AsyncMock(return_value=_response(json_body={"success": True}))
        result = await provider.verify("good-token")
        assert result.success is True
        assert result.error_codes == []

    async def test_sends_secret_and_token_as_form(self):
        provider, http = self._make(secret="s3cret")
        http.post = AsyncMock(return_value=_response(json_body={"success": True}))
        await provider.verify("tok")
        http.post.assert_awaited_once_with(
            RECAPTCHA_VERIFY_URL, data={"secret": "s3cret", "response": "tok"}
        )

    async def test_custom_verify_url(self):
        http = MagicMock()
        http.post = AsyncMock(return_value=_response(json_body={"success": True}))
        provider = RecaptchaProvider(
            "s", http, verify_url="https://challenges.example/siteverify"
        )
        await provider.verify("tok")
        assert http.post.call_args[0][0] == "https://challenges.example/siteverify"

    async def test_rejection_returns_error_codes(self):
        provider, http = self._make()
        http.post = AsyncMock(
            return_value=_response(
                json_body={
                    "success": False,
                    "error-codes": ["invalid-input-response", "timeout-or-duplicate"],
                }
            )
        )
        result = await provider.verify("bad-token")
        assert result.success is False
        assert result.error_codes == ["invalid-input-response", "timeout-or-duplicate"]

    async def test_rejection_without_error_codes(self):
        provider, http = self._make()
        http.post = AsyncMock(return_value=_response(json_body={"success": False}))
        result = await provider.verify("bad-token")
        assert result.success is False
        assert result.error_codes == []

    async def test_network_error_raises(self):
        provider, http = self._make()
        http.post = AsyncMock(side_effect=httpx.ConnectTimeout("timed out"))
        with pytest.raises(UpstreamServiceError):
            await provider.verify("token")

    async def test_non_2xx_status_raises(self):
        provider, http = self._make()
        http.post = AsyncMock(
            return_value=_response(status_code=503, text="Service Unavailable")
        )
        with pytest.raises(UpstreamServiceError):
            await provider.verify("token")

    async def test_non_json_body_raises(self):
        provider, http = self._make()
        resp = _response(text="<html>")
        resp.json.side_effect = ValueError("Expecting value")
        http.post = AsyncMock(return_value=resp)
        with pytest.raises(UpstreamServiceError):
            await provider.verify("token")

    async def test_non_object_body_raises(self):
        provider, http = self._make()
        http.post = AsyncMock(return_value=_response(json_body=["success"]))
        with pytest.raises(UpstreamServiceError):
            await provider.verify("token")


# ── TelegramNotifier ──────────────────────────────────────────────────────────


class TestTelegramNotifier:
    def _make(self, token="123:abc"):
        http = MagicMock()
        return TelegramNotifier(bot_token=token, http_client=http), http

    async def test_posts_send_message(self):
        notifier, http = self._make()
        http.post = AsyncMock(return_value=_response(json_body={"ok": True}))
        assert await notifier.notify("42", "hello") is True
        http.post.assert_awaited_once_with(
            "https://api.telegram.org/bot123:abc/sendMessage",
            json={"chat_id": "42", "text": "hello"},
        )

    async def test_custom_api_url_trailing_slash(self):
        http = MagicMock()
        http.post = AsyncMock(return_value=_response())
        notifier = TelegramNotifier("t", http, api_url="http://bot-api.local/")
        await notifier.notify("1", "x")
        assert http.post.call_args[0][0] == "http://bot-api.local/bott/sendMessage"

    async def test_returns_false_on_error_status(self):
        notifier, http = self._make()
        http.post = AsyncMock(
            return_value=_response(status_code=403, text="Forbidden: bot was blocked")
        )
        assert await notifier.notify("42", "hello") is False

    async def test_returns_false_on_exception(self):
        notifier, http = self._make()
        http.post = AsyncMock(side_effect=httpx.ConnectError("network error"))
        assert await notifier.notify("42", "hello") is False
