"""Step validators for the onboarding flow.

Pure predicates consumed by the state machine's guards. They never raise.
"""

from app.services.onboarding_types import (
    ProfileDraft,
    ResumeMode,
    ResumeSelection,
)


def _is_filled(value: str | None) -> bool:
    return bool(value and value.strip())


def missing_required_fields(draft: ProfileDraft) -> list[str]:
    """List the required step 1 fields that are empty.

    Args:
        draft: The profile draft.

    Returns:
        Field names in form order (name, phone, location, bio, then the
        role-specific fields).
    """
    return [
        name for name in draft.required_fields() if not _is_filled(getattr(draft, name))
    ]


def is_step1_valid(draft: ProfileDraft) -> bool:
    """Check whether the draft may advance past step 1.

    Job seekers need name, phone, location and bio. Employers additionally
    need company and industry.
    """
    return not missing_required_fields(draft)


def is_resume_step_satisfied(selection: ResumeSelection) -> bool:
    """Check whether a resume file has been chosen.

    Gates only the "continue" action on the resume upload step; skipping
    and the AI path are always available.
    """
    return (
        selection.mode is ResumeMode.UPLOADED and selection.uploaded_file is not None
    )
