"""Employer job posting rules.

Field normalization and display tag derivation for new listings, plus
the guard that only onboarded employers may post.
"""

from app.core.errors import ForbiddenError
from app.models.profile import Profile
from app.services.onboarding_types import UserRole

EMPLOYMENT_TYPES: tuple[str, ...] = ("Full-time", "Part-time", "Contract", "Internship")


def parse_requirements(value: str | list[str] | None) -> list[str]:
    """Normalize requirements from a list or a comma-separated string.

    Blank entries are dropped; order is preserved.
    """
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else value
    return [item.strip() for item in items if item and item.strip()]


def derive_tags(*, employment_type: str, location: str, salary: str) -> list[str]:
    """Derive the display tags shown on a listing card.

    Tags are the employment type, "Remote" or "On-site", and
    "Competitive Salary" when a dollar figure is given, otherwise
    "Salary Negotiable".
    """
    tags = [
        employment_type,
        "Remote" if "Remote" in location else "On-site",
        "Competitive Salary" if "$" in salary else "Salary Negotiable",
    ]
    return [tag for tag in tags if tag]


def ensure_can_post(profile: Profile | None) -> Profile:
    """Check that the caller is an onboarded employer.

    Raises:
        ForbiddenError: If there is no profile, the profile is not an
            employer, or onboarding is incomplete.
    """
    if profile is None or profile.user_type != UserRole.EMPLOYER.value:
        raise ForbiddenError("Only employers can post jobs.")
    if not profile.onboarding_completed:
        raise ForbiddenError("Complete your company profile before posting jobs.")
    return profile
