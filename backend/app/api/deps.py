"""Shared dependencies for API endpoints.

Users are authenticated by the hosted identity provider, which issues a
signed session JWT in an httpOnly cookie. Local-first mode skips the cookie
and uses DEFAULT_USER_ID.
"""

import uuid
from dataclasses import dataclass
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import async_session_factory, get_db
from app.repositories.profile_repository import DatabaseProfilePersistence
from app.services.onboarding_controller import ProfilePersistence
from app.services.onboarding_session_store import (
    OnboardingSessionStore,
    get_session_store,
)

# Generic 401 detail. Never include why auth failed (expired, bad sig, etc.).
_UNAUTHORIZED_DETAIL = {
    "code": "UNAUTHORIZED",
    "message": "Authentication required",
}


@dataclass(frozen=True)
class Identity:
    """The authenticated caller.

    Attributes:
        user_id: Identity subject (JWT sub).
        name: Display name claim, if the provider sent one.
        email: Email claim, if the provider sent one.
    """

    user_id: uuid.UUID
    name: str | None = None
    email: str | None = None


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=_UNAUTHORIZED_DETAIL,
    )


def get_current_identity(request: Request) -> Identity:
    """Get the caller's identity from auth context.

    Validation steps (hosted mode):
    1. Read JWT from cookie
    2. Decode + verify signature (HS256)
    3. Verify exp, aud, iss claims
    4. Extract sub as UUID, plus optional name and email claims

    Raises:
        HTTPException: 401 for any auth failure.
    """
    if not settings.auth_enabled:
        if settings.default_user_id is None:
            raise _unauthorized()
        return Identity(
            user_id=settings.default_user_id,
            name=settings.default_user_name,
        )

    token = request.cookies.get(settings.auth_cookie_name)
    if not token:
        raise _unauthorized()

    try:
        payload = jwt.decode(
            token,
            settings.auth_secret.get_secret_value(),
            algorithms=["HS256"],
            audience=settings.auth_audience,
            issuer=settings.auth_issuer,
        )
        user_id = uuid.UUID(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError) as exc:
        raise _unauthorized() from exc

    name = payload.get("name")
    email = payload.get("email")
    return Identity(
        user_id=user_id,
        name=name if isinstance(name, str) else None,
        email=email if isinstance(email, str) else None,
    )


def get_current_user_id(
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> uuid.UUID:
    """Get the caller's user ID. Most endpoints only need this."""
    return identity.user_id


def get_profile_persistence() -> ProfilePersistence:
    """Profile store used by onboarding completion.

    Overridden in tests to point at the test database.
    """
    return DatabaseProfilePersistence(async_session_factory)


# Reusable type aliases for dependency injection
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
CurrentUserId = Annotated[uuid.UUID, Depends(get_current_user_id)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
ProfileStore = Annotated[ProfilePersistence, Depends(get_profile_persistence)]
SessionStore = Annotated[OnboardingSessionStore, Depends(get_session_store)]
