"""In-memory store for active onboarding flows.

Each authenticated user has at most one active flow. Flows live only in
process memory and expire after a period of inactivity; nothing about a
flow is persisted until it completes.

Safe for async/await usage (single-threaded event loop) but not for
multi-threaded access. Multi-instance deployments need sticky sessions or
a shared store.
"""

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import structlog

from app.core.config import settings
from app.services.onboarding_controller import OnboardingController

logger = structlog.get_logger()

DEFAULT_SESSION_TTL_MINUTES = 60


@dataclass
class OnboardingSession:
    """A stored flow and its sliding expiry."""

    controller: OnboardingController
    expires_at: datetime


class OnboardingSessionStore:
    """Active onboarding flows keyed by user ID."""

    def __init__(self, ttl_minutes: int = DEFAULT_SESSION_TTL_MINUTES) -> None:
        self._store: dict[uuid.UUID, OnboardingSession] = {}
        self._ttl = timedelta(minutes=ttl_minutes)

    def start(self, controller: OnboardingController) -> OnboardingController:
        """Register a new flow, abandoning any previous flow for the user.

        Args:
            controller: The new flow.

        Returns:
            The registered controller.
        """
        previous = self._store.pop(controller.user_id, None)
        if previous is not None:
            previous.controller.abandon()
        self._store[controller.user_id] = OnboardingSession(
            controller=controller,
            expires_at=datetime.now(UTC) + self._ttl,
        )
        return controller

    def get(self, user_id: uuid.UUID) -> OnboardingController | None:
        """Get the user's active flow and extend its expiry.

        A flow with a completion save in flight never expires mid-save.

        Returns:
            The controller, or None if there is no flow or it expired.
        """
        session = self._store.get(user_id)
        if session is None:
            return None

        now = datetime.now(UTC)
        if now > session.expires_at and not session.controller.is_completing:
            del self._store[user_id]
            session.controller.abandon()
            logger.info("onboarding_session_expired", user_id=str(user_id))
            return None

        session.expires_at = now + self._ttl
        return session.controller

    def remove(self, controller: OnboardingController) -> None:
        """Drop a completed flow without abandoning it.

        No-op if the user has since started a different flow.
        """
        session = self._store.get(controller.user_id)
        if session is not None and session.controller is controller:
            del self._store[controller.user_id]

    def discard(self, user_id: uuid.UUID) -> bool:
        """Abandon and remove the user's flow.

        Returns:
            True if a flow was removed.
        """
        session = self._store.pop(user_id, None)
        if session is None:
            return False
        session.controller.abandon()
        return True

    def cleanup_expired(self) -> int:
        """Abandon and remove all expired flows.

        Returns:
            Number of flows removed.
        """
        now = datetime.now(UTC)
        expired = [
            user_id
            for user_id, session in self._store.items()
            if now > session.expires_at and not session.controller.is_completing
        ]
        for user_id in expired:
            self._store.pop(user_id).controller.abandon()
        return len(expired)

    def clear(self) -> None:
        """Clear all flows (for testing)."""
        self._store.clear()


_session_store: OnboardingSessionStore | None = None


def get_session_store() -> OnboardingSessionStore:
    """Get the singleton session store instance."""
    global _session_store
    if _session_store is None:
        _session_store = OnboardingSessionStore(
            ttl_minutes=settings.onboarding_session_ttl_minutes
        )
    return _session_store


def reset_session_store() -> None:
    """Reset the session store singleton (for testing)."""
    global _session_store
    if _session_store is not None:
        _session_store.clear()
    _session_store = None
