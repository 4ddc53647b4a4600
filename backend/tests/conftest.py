import ast
import asyncio
import inspect
import socket
import textwrap
import uuid
from collections.abc import AsyncGenerator, Iterator
from datetime import UTC, datetime, timedelta

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import settings
from app.models.base import Base
from app.providers import factory
from app.providers.llm.base import TaskType
from app.providers.llm.mock_adapter import MockLLMProvider
from app.services.onboarding_controller import CompletedProfilePayload

# Use separate test database
TEST_DATABASE_URL = (
    settings.database_url.rsplit("/", 1)[0] + f"/{settings.database_name}_test"
)

# Test user ID (consistent across tests for predictable auth)
TEST_USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
TEST_USER_NAME = "Ada Lovelace"
TEST_USER_EMAIL = "ada@example.com"

# Second caller for ownership tests
USER_B_ID = uuid.UUID("00000000-0000-0000-0000-000000000099")

# Security: This is a test-only secret. Production uses a real secret from env.
TEST_AUTH_SECRET = "test-secret-key-that-is-at-least-32-characters-long"  # nosec B105  # gitleaks:allow


def create_test_jwt(
    user_id: uuid.UUID = TEST_USER_ID,
    *,
    secret: str = TEST_AUTH_SECRET,
    name: str | None = TEST_USER_NAME,
    email: str | None = TEST_USER_EMAIL,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed session JWT like the identity provider issues.

    Args:
        user_id: User UUID to encode in the sub claim.
        secret: Signing secret (must match settings.auth_secret in tests).
        name: Optional display name claim.
        email: Optional email claim.
        expires_delta: Time until expiration. Defaults to 1 hour.

    Returns:
        Encoded JWT string.
    """
    now = datetime.now(UTC)
    payload: dict = {
        "sub": str(user_id),
        "aud": "jobnest",
        "iss": "jobnest",
        "exp": now + (expires_delta or timedelta(hours=1)),
        "iat": now,
    }
    if name is not None:
        payload["name"] = name
    if email is not None:
        payload["email"] = email
    return jwt.encode(payload, secret, algorithm="HS256")


class RecordingPersistence:
    """In-memory profile store that records every completion payload.

    Args:
        failures: Number of leading calls that raise ``error``.
        error: Exception raised by failing calls.
        delay_seconds: Simulated latency before each call returns.
    """

    def __init__(
        self,
        *,
        failures: int = 0,
        error: Exception | None = None,
        delay_seconds: float = 0.0,
    ) -> None:
        self.payloads: list[CompletedProfilePayload] = []
        self.failures = failures
        self.error = error or ConnectionError("database unavailable")
        self.delay_seconds = delay_seconds

    async def save_completed_profile(
        self, payload: CompletedProfilePayload
    ) -> CompletedProfilePayload:
        self.payloads.append(payload)
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.failures > 0:
            self.failures -= 1
            raise self.error
        return payload


def _is_postgres_available() -> bool:
    """Check if PostgreSQL is accepting connections on port 5432."""
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.settimeout(1)
        result = sock.connect_ex(("127.0.0.1", 5432))
        sock.close()
        return result == 0
    except OSError:
        return False


# Check once at module load time
_POSTGRES_AVAILABLE = _is_postgres_available()


def skip_if_no_postgres() -> None:
    """Skip test if PostgreSQL is not available.

    Called by fixtures that require database connection.
    """
    if not _POSTGRES_AVAILABLE:
        pytest.skip(
            "PostgreSQL not available on port 5432. "
            "Start database with: docker compose up -d"
        )


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create test database engine.

    Skips test if PostgreSQL is not available (e.g., Docker not running).
    """
    skip_if_no_postgres()

    engine = create_async_engine(TEST_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.exec_driver_sql("CREATE EXTENSION IF NOT EXISTS pgcrypto")
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_llm() -> Iterator[MockLLMProvider]:
    """Mock LLM injected into the provider factory, reset after the test.

    Yields:
        MockLLMProvider with a canned response per task.
    """
    mock = MockLLMProvider(
        {
            TaskType.JOB_DESCRIPTION: "We are hiring a backend engineer.",
            TaskType.CAREER_ASSISTANT: "Polish your portfolio first.",
        }
    )

    factory._llm_provider = mock

    yield mock

    factory.reset_providers()


# =============================================================================
# API Test Fixtures
# =============================================================================


async def _insert_profile(db_session: AsyncSession, **fields: object):
    from app.models import Profile

    profile = Profile(**fields)
    db_session.add(profile)
    await db_session.commit()
    await db_session.refresh(profile)
    return profile


@pytest_asyncio.fixture
async def seeker_profile(db_session: AsyncSession):
    """A freshly signed-up job seeker profile for TEST_USER_ID."""
    yield await _insert_profile(
        db_session,
        user_id=TEST_USER_ID,
        email=TEST_USER_EMAIL,
        name=TEST_USER_NAME,
        user_type="job_seeker",
    )


@pytest_asyncio.fixture
async def employer_profile(db_session: AsyncSession):
    """An onboarded employer profile for TEST_USER_ID."""
    yield await _insert_profile(
        db_session,
        user_id=TEST_USER_ID,
        email="hiring@acme.test",
        name="Grace Hopper",
        phone="555-0100",
        location="Austin, TX",
        bio="We build compilers.",
        company="Acme",
        industry="Technology",
        user_type="employer",
        onboarding_completed=True,
    )


@pytest_asyncio.fixture
async def client(db_engine) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for authenticated API tests.

    Sets up:
    - Test database connection via dependency override (requests and the
      onboarding completion store both use it)
    - JWT auth with test secret
    - httpx.AsyncClient with ASGI transport + auth cookie

    Yields:
        Configured AsyncClient for making authenticated API requests.
    """
    from app.api.deps import get_profile_persistence
    from app.core.database import get_db
    from app.main import app
    from app.repositories.profile_repository import DatabaseProfilePersistence

    test_session_factory = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with test_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_profile_persistence] = (
        lambda: DatabaseProfilePersistence(test_session_factory)
    )

    original_auth_enabled = settings.auth_enabled
    original_auth_secret = settings.auth_secret
    settings.auth_enabled = True
    settings.auth_secret = SecretStr(TEST_AUTH_SECRET)

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        cookies={settings.auth_cookie_name: create_test_jwt(TEST_USER_ID)},
    ) as ac:
        yield ac

    settings.auth_enabled = original_auth_enabled
    settings.auth_secret = original_auth_secret
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client_user_b(client) -> AsyncGenerator[AsyncClient, None]:  # noqa: ARG001
    """HTTP client authenticated as User B.

    Depends on ``client`` so the DB override and auth settings are
    already configured.
    """
    from app.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        cookies={
            settings.auth_cookie_name: create_test_jwt(
                USER_B_ID, name="Bob", email="bob@example.com"
            )
        },
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def unauthenticated_client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client without a session cookie.

    Auth is enabled, so every protected endpoint answers 401 before any
    database access.
    """
    from app.main import app

    original_auth_enabled = settings.auth_enabled
    original_auth_secret = settings.auth_secret
    settings.auth_enabled = True
    settings.auth_secret = SecretStr(TEST_AUTH_SECRET)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    settings.auth_enabled = original_auth_enabled
    settings.auth_secret = original_auth_secret


# =============================================================================
# Autouse Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_onboarding_sessions() -> Iterator[None]:
    """Start every test with no live onboarding flows."""
    from app.services.onboarding_session_store import reset_session_store

    reset_session_store()
    yield
    reset_session_store()


@pytest.fixture(autouse=True)
def disable_rate_limiting() -> Iterator[None]:
    """Disable rate limiting during tests.

    Rate limiting is tested separately; disable for other tests to avoid
    flaky failures from rate limit triggers.
    """
    from app.core.rate_limiting import limiter

    original_enabled = limiter.enabled
    limiter.enabled = False

    yield

    limiter.enabled = original_enabled


# =============================================================================
# Test Antipattern Detection (warning-only)
# =============================================================================

_BANNED_FUNCTIONS = frozenset({"isinstance", "issubclass", "hasattr"})


def _find_antipatterns_in_source(source: str) -> list[str]:
    """Scan test function source for structural assertions on types."""
    try:
        tree = ast.parse(textwrap.dedent(source))
    except SyntaxError:
        return []

    return [
        node.func.id
        for node in ast.walk(tree)
        if isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id in _BANNED_FUNCTIONS
    ]


_antipattern_warnings: list[str] = []


def pytest_runtest_teardown(item: pytest.Item) -> None:
    """Check each test for antipattern usage after it runs."""
    if not hasattr(item, "obj") or not callable(item.obj):
        return
    try:
        source = inspect.getsource(item.obj)
    except (OSError, TypeError):
        return

    patterns = _find_antipatterns_in_source(source)
    if patterns:
        _antipattern_warnings.append(f"  {item.nodeid}: {', '.join(patterns)}")


def pytest_terminal_summary(
    terminalreporter: pytest.TerminalReporter,
) -> None:
    """Report test antipatterns at the end of the session (warning only)."""
    if _antipattern_warnings:
        terminalreporter.section("test antipattern warnings")
        terminalreporter.line(
            "These tests assert on types instead of behavior; "
            "compare values or outcomes instead."
        )
        terminalreporter.line("")
        for w in _antipattern_warnings:
            terminalreporter.line(w)
        _antipattern_warnings.clear()
