"""Data types for the profile onboarding flow.

ProfileDraft is the in-memory, not-yet-persisted profile being collected.
ResumeSelection records how a job seeker chose to supply a resume. Neither
is written to the database until the flow completes, and the resume file
itself is never persisted.
"""

from dataclasses import dataclass, field, replace
from enum import Enum


class UserRole(Enum):
    """Marketplace role, fixed at sign-up.

    Values match the profiles.user_type check constraint.
    """

    JOB_SEEKER = "job_seeker"
    EMPLOYER = "employer"


class Industry(Enum):
    """Employer industries offered by the onboarding form.

    Values match the profiles.industry check constraint.
    """

    TECHNOLOGY = "Technology"
    HEALTHCARE = "Healthcare"
    FINANCE = "Finance"
    EDUCATION = "Education"
    MARKETING = "Marketing"
    MANUFACTURING = "Manufacturing"
    OTHER = "Other"


class ResumeMode(Enum):
    """How the job seeker is supplying a resume."""

    NONE = "none"
    UPLOADED = "uploaded"
    AI_GENERATED = "ai_generated"


# Fields every role must fill in on step 1
BASE_REQUIRED_FIELDS: tuple[str, ...] = ("name", "phone", "location", "bio")

# Extra step 1 fields per role
ROLE_REQUIRED_FIELDS: dict[UserRole, tuple[str, ...]] = {
    UserRole.JOB_SEEKER: (),
    UserRole.EMPLOYER: ("company", "industry"),
}

EDITABLE_FIELDS: frozenset[str] = frozenset(
    {"name", "phone", "location", "bio", "company", "industry"}
)


@dataclass
class ProfileDraft:
    """Profile data collected by the onboarding flow.

    Attributes:
        role: Marketplace role, set at construction. It is not an editable
            field, and the saved user_type comes from the flow, not the draft.
        name: Full name (required).
        phone: Phone number (required).
        location: Location (required).
        bio: Professional bio for job seekers, company description for
            employers (required).
        company: Company name (required for employers only).
        industry: Industry value from Industry (required for employers only).
    """

    role: UserRole
    name: str = ""
    phone: str = ""
    location: str = ""
    bio: str = ""
    company: str | None = None
    industry: str | None = None

    def __post_init__(self) -> None:
        """Validate the role on construction."""
        if not isinstance(self.role, UserRole):
            raise ValueError(f"role must be a UserRole, got {self.role!r}")

    def required_fields(self) -> tuple[str, ...]:
        """Field names that must be non-empty to leave step 1."""
        return BASE_REQUIRED_FIELDS + ROLE_REQUIRED_FIELDS[self.role]

    def snapshot(self) -> "ProfileDraft":
        """Return an independent copy (for payloads and API responses)."""
        return replace(self)

    def as_dict(self) -> dict[str, str | None]:
        """Serialize the editable fields plus the role."""
        return {
            "role": self.role.value,
            "name": self.name,
            "phone": self.phone,
            "location": self.location,
            "bio": self.bio,
            "company": self.company,
            "industry": self.industry,
        }


@dataclass(frozen=True)
class UploadedResumeRef:
    """Opaque handle for a resume chosen during onboarding.

    The bytes are not retained; only enough metadata to show the user
    which file they picked.

    Attributes:
        upload_id: Opaque identifier for this selection.
        filename: Sanitized original filename.
        content_type: Declared MIME type (always application/pdf once accepted).
        size_bytes: Size of the uploaded file.
    """

    upload_id: str
    filename: str
    content_type: str
    size_bytes: int


@dataclass(frozen=True)
class ResumeSelection:
    """The job seeker's resume choice.

    uploaded_file is set only when mode is UPLOADED.
    """

    mode: ResumeMode = ResumeMode.NONE
    uploaded_file: UploadedResumeRef | None = field(default=None)

    def __post_init__(self) -> None:
        has_file = self.uploaded_file is not None
        if has_file != (self.mode is ResumeMode.UPLOADED):
            raise ValueError("uploaded_file must be set iff mode is 'uploaded'")
