"""Tests for the resume acquisition sub-flow.

Covers:
- submit_file: PDF acceptance by declared content type, filename sanitizing
- choose_ai_path
- LoggingResumeAuthoringHandoff
"""

import uuid
from unittest.mock import patch

import pytest

from app.services.onboarding_errors import RejectedFileError
from app.services.onboarding_types import ProfileDraft, ResumeMode, UserRole
from app.services.resume_acquisition import (
    LoggingResumeAuthoringHandoff,
    ResumeFile,
    choose_ai_path,
    submit_file,
)


def _file(content_type: str = "application/pdf", filename: str = "cv.pdf") -> ResumeFile:
    return ResumeFile(filename=filename, content_type=content_type, size_bytes=4096)


class TestSubmitFile:
    """PDF-only acceptance."""

    def test_pdf_is_accepted(self) -> None:
        selection = submit_file(_file())

        assert selection.mode is ResumeMode.UPLOADED
        assert selection.uploaded_file is not None
        assert selection.uploaded_file.filename == "cv.pdf"
        assert selection.uploaded_file.content_type == "application/pdf"
        assert selection.uploaded_file.size_bytes == 4096

    def test_content_type_parameters_are_ignored(self) -> None:
        selection = submit_file(_file("Application/PDF; charset=binary"))

        assert selection.mode is ResumeMode.UPLOADED

    @pytest.mark.parametrize(
        "content_type",
        [
            "application/msword",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            "text/plain",
            "",
        ],
    )
    def test_non_pdf_is_rejected(self, content_type: str) -> None:
        with pytest.raises(RejectedFileError) as exc_info:
            submit_file(_file(content_type, filename="cv.docx"))

        assert exc_info.value.code == "REJECTED_FILE"
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Please upload a PDF file."

    def test_each_upload_gets_a_new_reference(self) -> None:
        first = submit_file(_file())
        second = submit_file(_file())

        assert first.uploaded_file.upload_id != second.uploaded_file.upload_id

    def test_filename_is_sanitized(self) -> None:
        selection = submit_file(_file(filename='my"cv\r\n.pdf'))

        assert selection.uploaded_file.filename == "mycv.pdf"


class TestChooseAiPath:
    def test_sets_ai_generated_mode(self) -> None:
        selection = choose_ai_path()

        assert selection.mode is ResumeMode.AI_GENERATED
        assert selection.uploaded_file is None


class TestLoggingHandoff:
    """Default resume authoring collaborator."""

    @pytest.mark.asyncio
    async def test_logs_handoff_without_profile_contents(self) -> None:
        user_id = uuid.uuid4()
        draft = ProfileDraft(role=UserRole.JOB_SEEKER, name="Ada", bio="Programmer")

        with patch("app.services.resume_acquisition.logger") as mock_logger:
            await LoggingResumeAuthoringHandoff().begin_resume_authoring(
                user_id, draft
            )

        mock_logger.info.assert_called_once_with(
            "resume_authoring_handoff",
            user_id=str(user_id),
            role="job_seeker",
            has_bio=True,
        )
