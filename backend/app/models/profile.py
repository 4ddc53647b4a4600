"""Profile model - one marketplace profile per authenticated user.

Users are owned by the hosted identity provider; user_id is the identity
subject and is not a foreign key.
"""

import uuid

from sqlalchemy import Boolean, CheckConstraint, String, Text, UniqueConstraint, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin


class Profile(Base, TimestampMixin):
    """Marketplace profile for a job seeker or an employer.

    Created at sign-up with the user's role, filled in by the onboarding
    flow, and flagged onboarding_completed exactly once.

    Attributes:
        id: UUID primary key.
        user_id: Identity subject from the auth provider (unique).
        email: Contact email from sign-up.
        name: Full name (job seeker) or contact name (employer).
        phone: Phone number.
        location: Free-form location (e.g., "Austin, TX" or "Remote").
        bio: Professional bio (job seeker) or company description (employer).
        company: Company name (employers only).
        industry: Industry from the fixed enumerated set (employers only).
        user_type: 'job_seeker' or 'employer'. Immutable after sign-up.
        onboarding_completed: True once the onboarding flow has completed.
    """

    __tablename__ = "profiles"
    __table_args__ = (
        UniqueConstraint("user_id", name="uq_profiles_user_id"),
        CheckConstraint(
            "user_type IN ('job_seeker', 'employer')",
            name="ck_profiles_user_type",
        ),
        CheckConstraint(
            "industry IS NULL OR industry IN ('Technology', 'Healthcare', "
            "'Finance', 'Education', 'Marketing', 'Manufacturing', 'Other')",
            name="ck_profiles_industry",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        server_default="",
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    phone: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )
    location: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    bio: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    company: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    industry: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
    )
    user_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )
    onboarding_completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default=text("false"),
        default=False,
    )
