"""Resume acquisition sub-flow for job seekers.

On the resume step a job seeker either supplies an existing PDF or defers
to AI-assisted resume authoring. This module only records the choice: it
does not parse or store the document. Parsing and authoring belong to
external collaborators.
"""

import uuid
from dataclasses import dataclass
from typing import Protocol

import structlog

from app.core.file_validation import PDF_MIME, sanitize_filename
from app.services.onboarding_errors import RejectedFileError
from app.services.onboarding_types import (
    ProfileDraft,
    ResumeMode,
    ResumeSelection,
    UploadedResumeRef,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class ResumeFile:
    """A file offered as the job seeker's resume.

    Attributes:
        filename: Original filename from the client.
        content_type: Declared MIME type (may carry parameters).
        size_bytes: File size in bytes.
    """

    filename: str
    content_type: str
    size_bytes: int


def _base_mime(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


def submit_file(file: ResumeFile) -> ResumeSelection:
    """Accept a resume file if it is declared as a PDF.

    Args:
        file: The offered file.

    Returns:
        ResumeSelection with mode UPLOADED and an opaque reference.

    Raises:
        RejectedFileError: If the declared content type is not application/pdf.
    """
    if _base_mime(file.content_type) != PDF_MIME:
        raise RejectedFileError()

    ref = UploadedResumeRef(
        upload_id=uuid.uuid4().hex,
        filename=sanitize_filename(file.filename),
        content_type=PDF_MIME,
        size_bytes=file.size_bytes,
    )
    return ResumeSelection(mode=ResumeMode.UPLOADED, uploaded_file=ref)


def choose_ai_path() -> ResumeSelection:
    """Defer the resume to AI-assisted authoring. Always succeeds."""
    return ResumeSelection(mode=ResumeMode.AI_GENERATED)


class ResumeAuthoringHandoff(Protocol):
    """External AI resume-authoring collaborator.

    Receives control when a job seeker finishes onboarding through the
    resume builder path. No return contract is defined.
    """

    async def begin_resume_authoring(
        self, user_id: uuid.UUID, draft: ProfileDraft
    ) -> None: ...


class LoggingResumeAuthoringHandoff:
    """Default hand-off: records the request for the resume builder.

    The resume builder picks the user up from the client after onboarding;
    this server-side hook only leaves an audit trail.
    """

    async def begin_resume_authoring(
        self, user_id: uuid.UUID, draft: ProfileDraft
    ) -> None:
        logger.info(
            "resume_authoring_handoff",
            user_id=str(user_id),
            role=draft.role.value,
            has_bio=bool(draft.bio),
        )
