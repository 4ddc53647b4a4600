"""Repository for JobPosting operations.

Listings are owned by the employer who posted them (employer_id). Browsing
only ever returns active listings; owners see every status.
"""

import uuid

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.job_posting import JobPosting

# Optional fields accepted by JobPostingRepository.create().
CREATABLE_OPTIONAL_FIELDS: frozenset[str] = frozenset(
    {
        "employment_type",
        "salary",
        "requirements",
        "tags",
        "status",
    }
)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class JobPostingRepository:
    """Stateless repository for JobPosting operations.

    All methods are static. Pass an AsyncSession for every call so the
    caller controls transaction boundaries. Ownership checks belong to the
    caller.
    """

    @staticmethod
    async def get_by_id(
        db: AsyncSession, job_posting_id: uuid.UUID
    ) -> JobPosting | None:
        """Fetch a job posting by primary key."""
        return await db.get(JobPosting, job_posting_id)

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        employer_id: uuid.UUID,
        title: str,
        company: str,
        location: str,
        description: str,
        **optional: str | list[str] | None,
    ) -> JobPosting:
        """Create a job posting.

        Args:
            db: Async database session.
            employer_id: Identity subject of the posting employer.
            title: Job title.
            company: Hiring company.
            location: Job location.
            description: Full job description.
            **optional: Optional fields (see ``CREATABLE_OPTIONAL_FIELDS``).

        Returns:
            Created JobPosting with database-generated fields populated.

        Raises:
            ValueError: If an unknown field name is passed.
        """
        unknown = set(optional) - CREATABLE_OPTIONAL_FIELDS
        if unknown:
            msg = f"Unknown fields: {', '.join(sorted(unknown))}"
            raise ValueError(msg)

        job_posting = JobPosting(
            employer_id=employer_id,
            title=title,
            company=company,
            location=location,
            description=description,
            **optional,
        )
        db.add(job_posting)
        await db.flush()
        await db.refresh(job_posting)
        return job_posting

    @staticmethod
    async def list_active(
        db: AsyncSession,
        *,
        query: str | None = None,
        location: str | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[JobPosting], int]:
        """List active postings, newest first.

        Args:
            db: Async database session.
            query: Case-insensitive match against title, company or description.
            location: Case-insensitive substring match against location.
            offset: Rows to skip.
            limit: Maximum rows to return.

        Returns:
            Tuple of (postings, total matching count).
        """
        conditions = [JobPosting.status == "active"]
        if query:
            pattern = f"%{_escape_like(query.strip())}%"
            conditions.append(
                or_(
                    JobPosting.title.ilike(pattern, escape="\\"),
                    JobPosting.company.ilike(pattern, escape="\\"),
                    JobPosting.description.ilike(pattern, escape="\\"),
                )
            )
        if location:
            pattern = f"%{_escape_like(location.strip())}%"
            conditions.append(JobPosting.location.ilike(pattern, escape="\\"))

        count_stmt = select(func.count()).select_from(JobPosting).where(*conditions)
        total = (await db.execute(count_stmt)).scalar_one()

        stmt = (
            select(JobPosting)
            .where(*conditions)
            .order_by(JobPosting.created_at.desc(), JobPosting.id)
            .offset(offset)
            .limit(limit)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all()), total

    @staticmethod
    async def list_by_employer(
        db: AsyncSession, employer_id: uuid.UUID
    ) -> list[JobPosting]:
        """List all postings owned by an employer, newest first."""
        stmt = (
            select(JobPosting)
            .where(JobPosting.employer_id == employer_id)
            .order_by(JobPosting.created_at.desc())
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def set_status(
        db: AsyncSession, job_posting: JobPosting, status: str
    ) -> JobPosting:
        """Persist a validated status change."""
        job_posting.status = status
        await db.flush()
        await db.refresh(job_posting)
        return job_posting
