"""Repository for Profile operations.

Profiles are keyed by the identity subject (user_id). Creation happens at
sign-up; the onboarding flow writes the rest of the record once, through
save_completed_profile().
"""

import uuid

import structlog
from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.profile import Profile
from app.services.onboarding_controller import CompletedProfilePayload

logger = structlog.get_logger()

# Columns written by the completion upsert.
# Security: never add id, user_id, email, user_type or created_at.
_COMPLETION_FIELDS: tuple[str, ...] = (
    "name",
    "phone",
    "location",
    "bio",
    "company",
    "industry",
    "onboarding_completed",
)


class ProfileRepository:
    """Stateless repository for Profile table operations.

    All methods are static. Pass an AsyncSession for every call so the
    caller controls transaction boundaries.
    """

    @staticmethod
    async def get_by_user_id(db: AsyncSession, user_id: uuid.UUID) -> Profile | None:
        """Fetch the profile owned by an identity subject.

        Args:
            db: Async database session.
            user_id: Identity subject.

        Returns:
            Profile if found, None otherwise.
        """
        stmt = select(Profile).where(Profile.user_id == user_id)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        user_id: uuid.UUID,
        name: str,
        email: str,
        user_type: str,
    ) -> Profile:
        """Create the profile recorded at sign-up.

        Email is normalized to lowercase before storage.

        Raises:
            sqlalchemy.exc.IntegrityError: If the user already has a profile.
        """
        profile = Profile(
            user_id=user_id,
            name=name,
            email=email.lower(),
            user_type=user_type,
        )
        db.add(profile)
        await db.flush()
        await db.refresh(profile)
        return profile

    @staticmethod
    async def save_completed_profile(
        db: AsyncSession, payload: CompletedProfilePayload
    ) -> Profile:
        """Upsert the onboarding result for payload.user_id.

        INSERT ... ON CONFLICT (user_id) DO UPDATE, so a user whose sign-up
        row is missing still ends up with a profile. Replaying the same
        payload is idempotent. updated_at is always assigned by the server.

        Args:
            db: Async database session.
            payload: Completed onboarding record.

        Returns:
            The stored Profile.
        """
        values = {field: getattr(payload, field) for field in _COMPLETION_FIELDS}
        stmt = insert(Profile).values(
            user_id=payload.user_id,
            user_type=payload.user_type,
            **values,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Profile.user_id],
            set_={**values, "updated_at": func.now()},
        ).returning(Profile)
        result = await db.execute(
            stmt, execution_options={"populate_existing": True}
        )
        return result.scalar_one()


class DatabaseProfilePersistence:
    """ProfilePersistence adapter that runs each save in its own transaction.

    Onboarding flows outlive a single request, so the save cannot borrow
    the request-scoped session.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save_completed_profile(self, payload: CompletedProfilePayload) -> Profile:
        async with self._session_factory() as db:
            try:
                profile = await ProfileRepository.save_completed_profile(db, payload)
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        logger.info("profile_onboarding_saved", user_id=str(payload.user_id))
        return profile
