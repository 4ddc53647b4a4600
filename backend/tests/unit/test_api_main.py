"""Tests for the FastAPI application and exception handlers."""

import pytest
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from app.core.errors import (
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from app.main import create_app
from app.services.onboarding_errors import (
    CompletionInProgressError,
    OnboardingValidationError,
    PersistenceError,
    RejectedFileError,
)


@pytest.fixture
def app():
    """Create test application instance."""
    return create_app()


@pytest.fixture
async def client(app):
    """Async client that renders unhandled errors instead of re-raising."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestHealthEndpoint:
    @pytest.mark.asyncio
    async def test_health_returns_healthy_status(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestAPIVersioning:
    @pytest.mark.asyncio
    async def test_unknown_v1_route_is_404(self, client):
        response = await client.get("/api/v1/nonexistent")

        assert response.status_code == 404


class TestExceptionHandlers:
    """Domain errors render through the standard error envelope."""

    @pytest.mark.parametrize(
        ("error", "status_code", "code"),
        [
            (ValidationError("Invalid input"), 400, "VALIDATION_ERROR"),
            (ForbiddenError("Only employers can post jobs."), 403, "FORBIDDEN"),
            (NotFoundError("Onboarding session"), 404, "NOT_FOUND"),
            (ConflictError(code="PROFILE_EXISTS", message="exists"), 409, "PROFILE_EXISTS"),
            (InvalidStateError("Onboarding is already complete."), 422, "INVALID_STATE_TRANSITION"),
            (OnboardingValidationError("Missing", ["phone"]), 400, "VALIDATION_ERROR"),
            (RejectedFileError(), 400, "REJECTED_FILE"),
            (CompletionInProgressError(), 409, "COMPLETION_IN_PROGRESS"),
            (PersistenceError(), 503, "PERSISTENCE_ERROR"),
        ],
    )
    @pytest.mark.asyncio
    async def test_api_error_envelope(self, app, client, error, status_code, code):
        @app.get("/test/api-error")
        async def raise_error():
            raise error

        response = await client.get("/test/api-error")

        assert response.status_code == status_code
        body = response.json()
        assert body["error"]["code"] == code
        assert body["error"]["message"] == error.message

    @pytest.mark.asyncio
    async def test_missing_fields_listed_in_details(self, app, client):
        @app.get("/test/missing")
        async def raise_missing():
            raise OnboardingValidationError("Missing", ["phone", "bio"])

        response = await client.get("/test/missing")

        assert response.json()["error"]["details"] == [
            {"field": "phone", "error": "REQUIRED"},
            {"field": "bio", "error": "REQUIRED"},
        ]

    @pytest.mark.asyncio
    async def test_request_validation_returns_400_without_input(self, app, client):
        class Body(BaseModel):
            name: str

        @app.post("/test/body")
        async def accept_body(body: Body):
            return body

        response = await client.post("/test/body", json={"name": 123, "secret": "x"})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "input" not in error["details"][0]
        assert error["details"][0]["loc"] == ["body", "name"]

    @pytest.mark.asyncio
    async def test_unhandled_exception_returns_generic_500(self, app, client):
        @app.get("/test/crash")
        async def crash():
            raise RuntimeError("connection string with password")

        response = await client.get("/test/crash")

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "INTERNAL_ERROR"
        assert "password" not in error["message"]


class TestCORS:
    @pytest.mark.asyncio
    async def test_allowed_origin(self, client):
        response = await client.get(
            "/health", headers={"Origin": "http://localhost:5173"}
        )

        assert (
            response.headers.get("access-control-allow-origin")
            == "http://localhost:5173"
        )

    @pytest.mark.asyncio
    async def test_unknown_origin_not_echoed(self, client):
        response = await client.get(
            "/health", headers={"Origin": "http://malicious-site.com"}
        )

        assert response.headers.get("access-control-allow-origin") is None


class TestSecurityHeadersMiddleware:
    @pytest.mark.asyncio
    async def test_static_headers(self, client):
        response = await client.get("/health")

        assert response.headers.get("x-frame-options") == "DENY"
        assert response.headers.get("x-content-type-options") == "nosniff"
        assert response.headers.get("cross-origin-opener-policy") == "same-origin"
        assert "default-src 'none'" in response.headers["content-security-policy"]

    @pytest.mark.asyncio
    async def test_cache_control_only_on_api_paths(self, client):
        api = await client.get("/api/v1/profiles/me")
        health = await client.get("/health")

        assert "no-store" in api.headers.get("cache-control", "")
        assert "no-store" not in health.headers.get("cache-control", "")

    @pytest.mark.asyncio
    async def test_hsts_only_in_production(self, client, monkeypatch):
        from app.core.config import settings

        assert (await client.get("/health")).headers.get(
            "strict-transport-security"
        ) is None

        monkeypatch.setattr(settings, "environment", "production")
        hsts = (await client.get("/health")).headers.get("strict-transport-security")

        assert "max-age=31536000" in hsts
