"""Onboarding flow error taxonomy.

Every error here is an APIError, so the API layer renders it through the
standard error envelope and nothing reaches the catch-all 500 handler.

- OnboardingValidationError: a required field is missing on an advance action
- RejectedFileError: the uploaded resume is not a PDF
- PersistenceError: the completion-time save failed (retryable)
- CompletionInProgressError: a completion save is already in flight
"""

from app.core.errors import APIError


class OnboardingValidationError(APIError):
    """A step guard failed (400).

    The flow stays on the current step; the caller re-renders it with the
    blocked action disabled.

    Attributes:
        missing_fields: Required draft fields that are still empty.
    """

    def __init__(
        self,
        message: str,
        missing_fields: list[str] | None = None,
    ) -> None:
        self.missing_fields = list(missing_fields or [])
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=400,
            details=[
                {"field": name, "error": "REQUIRED"} for name in self.missing_fields
            ]
            or None,
        )


class RejectedFileError(APIError):
    """Uploaded resume failed the PDF constraint (400).

    No state transition occurs and the previous selection is kept.
    """

    def __init__(self, message: str = "Please upload a PDF file.") -> None:
        super().__init__(
            code="REJECTED_FILE",
            message=message,
            status_code=400,
            details=[{"field": "file", "error": "PDF_REQUIRED"}],
        )


class PersistenceError(APIError):
    """Saving the completed profile failed (503).

    Retryable: the flow keeps its step and draft so a retry re-sends the
    identical payload.
    """

    def __init__(
        self,
        message: str = "Failed to save profile. Please try again.",
    ) -> None:
        super().__init__(
            code="PERSISTENCE_ERROR",
            message=message,
            status_code=503,
            details=[{"retryable": True}],
        )


class CompletionInProgressError(APIError):
    """A completion save is already in flight for this flow (409)."""

    def __init__(self) -> None:
        super().__init__(
            code="COMPLETION_IN_PROGRESS",
            message="Profile setup is already being saved.",
            status_code=409,
        )
