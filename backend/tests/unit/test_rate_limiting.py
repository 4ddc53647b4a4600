"""Tests for rate limiting behavior.

Security: Tests for API abuse prevention via rate limiting. The limit key
moves from client IP to the JWT subject once auth is enabled.
"""

import io
import json
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr
from starlette.requests import Request as StarletteRequest

from app.core.config import settings
from app.core.rate_limiting import (
    _rate_limit_key_func,
    limiter,
    rate_limit_exceeded_handler,
)
from app.main import app
from tests.conftest import TEST_AUTH_SECRET, TEST_USER_ID, create_test_jwt


@pytest.fixture
def auth_enabled_settings():
    """Enable auth with test secret, restore after test."""
    original_auth = settings.auth_enabled
    original_secret = settings.auth_secret
    settings.auth_enabled = True
    settings.auth_secret = SecretStr(TEST_AUTH_SECRET)
    yield
    settings.auth_enabled = original_auth
    settings.auth_secret = original_secret


def _exceeded(detail: str | None) -> MagicMock:
    exc = MagicMock()
    exc.detail = detail
    return exc


class TestRateLimitExceededHandler:
    """Rate limit responses use the standard error envelope."""

    _request = StarletteRequest({"type": "http", "method": "POST", "path": "/test"})

    def test_returns_429_envelope(self):
        response = rate_limit_exceeded_handler(self._request, _exceeded("10 per 1 minute"))

        body = json.loads(response.body.decode())
        assert response.status_code == 429
        assert body["error"]["code"] == "RATE_LIMITED"
        assert "Rate limit exceeded" in body["error"]["message"]

    @pytest.mark.parametrize("detail", ["unexpected format", None])
    def test_retry_after_falls_back_to_60(self, detail: str | None):
        response = rate_limit_exceeded_handler(self._request, _exceeded(detail))

        assert response.headers.get("Retry-After") == "60"


class TestRateLimitKeyFunction:
    def _make_request(
        self, *, client_host: str = "192.168.1.1", cookies: dict | None = None
    ) -> MagicMock:
        request = MagicMock()
        request.client.host = client_host
        request.cookies = cookies or {}
        return request

    def test_returns_ip_when_auth_disabled(self, monkeypatch):
        monkeypatch.setattr(settings, "auth_enabled", False)

        key = _rate_limit_key_func(self._make_request(client_host="10.0.0.1"))

        assert key == "10.0.0.1"

    def test_returns_user_sub_with_valid_jwt(
        self,
        auth_enabled_settings,  # noqa: ARG002
    ):
        request = self._make_request(
            cookies={settings.auth_cookie_name: create_test_jwt()}
        )

        assert _rate_limit_key_func(request) == f"user:{TEST_USER_ID}"

    @pytest.mark.parametrize(
        "token",
        [
            None,
            "invalid-jwt-token",
            create_test_jwt(expires_delta=timedelta(hours=-1)),
            create_test_jwt(secret="different-secret-that-does-not-match-the-real-one"),
        ],
    )
    def test_returns_unauth_ip_without_valid_jwt(
        self,
        auth_enabled_settings,  # noqa: ARG002
        token: str | None,
    ):
        cookies = {settings.auth_cookie_name: token} if token else {}
        request = self._make_request(client_host="203.0.113.5", cookies=cookies)

        assert _rate_limit_key_func(request) == "unauth:203.0.113.5"


class TestUploadRateLimit:
    """The resume upload endpoint is throttled per user."""

    @pytest_asyncio.fixture
    async def limited_client(self, auth_enabled_settings):  # noqa: ARG002
        limiter.enabled = True
        limiter.reset()
        transport = ASGITransport(app=app)
        async with AsyncClient(
            transport=transport,
            base_url="http://test",
            cookies={settings.auth_cookie_name: create_test_jwt()},
        ) as ac:
            yield ac
        limiter.reset()

    @pytest.mark.asyncio
    async def test_exceeding_limit_returns_429(self, limited_client: AsyncClient):
        allowed = int(settings.rate_limit_upload.split("/")[0])

        statuses = []
        for _ in range(allowed + 1):
            response = await limited_client.post(
                "/api/v1/onboarding/session/resume",
                files={"file": ("resume.pdf", io.BytesIO(b"%PDF-1.4"), "application/pdf")},
            )
            statuses.append(response.status_code)

        # No onboarding session exists, so allowed requests answer 404.
        assert statuses[:-1] == [404] * allowed
        assert statuses[-1] == 429
