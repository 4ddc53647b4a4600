"""Pydantic request/response schemas for API endpoints."""

from app.schemas.assistant import AssistantMessageRequest, AssistantReplyResponse
from app.schemas.job_posting import (
    CreateJobPostingRequest,
    GenerateDescriptionRequest,
    GeneratedDescriptionResponse,
    JobPostingResponse,
    UpdateJobPostingStatusRequest,
)
from app.schemas.onboarding import (
    OnboardingActionRequest,
    OnboardingSessionResponse,
    UpdateDraftRequest,
)
from app.schemas.profile import CreateProfileRequest, ProfileResponse

__all__ = [
    # Assistant
    "AssistantMessageRequest",
    "AssistantReplyResponse",
    # Job postings
    "CreateJobPostingRequest",
    "GenerateDescriptionRequest",
    "GeneratedDescriptionResponse",
    "JobPostingResponse",
    "UpdateJobPostingStatusRequest",
    # Onboarding
    "OnboardingActionRequest",
    "OnboardingSessionResponse",
    "UpdateDraftRequest",
    # Profiles
    "CreateProfileRequest",
    "ProfileResponse",
]
