"""JobPosting model - listings published by employers."""

import uuid

from sqlalchemy import CheckConstraint, Index, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin

_DEFAULT_EMPTY_JSONB = text("'[]'::jsonb")


class JobPosting(Base, TimestampMixin):
    """A job listing owned by an employer.

    Attributes:
        id: UUID primary key.
        employer_id: Identity subject of the employer who posted it.
        title: Job title.
        company: Hiring company name.
        location: Location string (may contain "Remote").
        employment_type: Full-time, Part-time, Contract, Internship.
        salary: Free-form salary text (e.g., "$120k - $160k").
        description: Full job description.
        requirements: List of requirement strings.
        tags: Derived display tags (employment type, remote, salary).
        status: 'active', 'draft', or 'closed'.
    """

    __tablename__ = "job_postings"
    __table_args__ = (
        CheckConstraint(
            "status IN ('active', 'draft', 'closed')",
            name="ck_job_postings_status",
        ),
        Index("idx_job_postings_employer", "employer_id"),
        Index("idx_job_postings_status_created", "status", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    )
    employer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    company: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    employment_type: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        server_default="Full-time",
    )
    salary: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        server_default="",
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    requirements: Mapped[list[str]] = mapped_column(
        JSONB,
        nullable=False,
        server_default=_DEFAULT_EMPTY_JSONB,
        default=list,
    )
    tags: Mapped[list[str]] = mapped_column(
        JSONB,
        nullable=False,
        server_default=_DEFAULT_EMPTY_JSONB,
        default=list,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        server_default="active",
        default="active",
    )
