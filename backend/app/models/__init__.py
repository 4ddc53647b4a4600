"""SQLAlchemy ORM models for JobNest.

All models are exported from this module for convenient imports:
    from app.models import Profile, JobPosting

- profile.py: Profile (one per authenticated user)
- job_posting.py: JobPosting (owned by an employer profile)
"""

from app.models.base import Base, TimestampMixin
from app.models.job_posting import JobPosting
from app.models.profile import Profile

__all__ = [
    "Base",
    "TimestampMixin",
    "Profile",
    "JobPosting",
]
