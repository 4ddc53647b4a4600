"""Onboarding session schemas.

The session response is a snapshot of the live flow: where the user is,
what has been collected, and which controls to render.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.services.onboarding_controller import OnboardingController
from app.services.onboarding_steps import OnboardingAction
from app.services.onboarding_types import UserRole
from app.services.onboarding_validation import missing_required_fields


class UpdateDraftRequest(BaseModel):
    """Request body for PATCH /onboarding/session/draft.

    Only the fields present in the body are updated.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    location: str | None = Field(default=None, max_length=255)
    bio: str | None = Field(default=None, max_length=10000)
    company: str | None = Field(default=None, max_length=255)
    industry: str | None = Field(default=None, max_length=50)


class OnboardingActionRequest(BaseModel):
    """Request body for POST /onboarding/session/actions."""

    model_config = ConfigDict(extra="forbid")

    action: OnboardingAction


class DraftSnapshot(BaseModel):
    name: str
    phone: str
    location: str
    bio: str
    company: str | None = None
    industry: str | None = None


class UploadedResumeSnapshot(BaseModel):
    upload_id: str
    filename: str
    content_type: str
    size_bytes: int


class ResumeSnapshot(BaseModel):
    mode: str
    uploaded_file: UploadedResumeSnapshot | None = None


class ActionSnapshot(BaseModel):
    action: str
    enabled: bool


class OnboardingSessionResponse(BaseModel):
    """Snapshot of an onboarding flow.

    Attributes:
        status: "in_progress" or "completed".
        role: The flow's role.
        step: Current step identifier.
        step_number: 1-indexed step position.
        total_steps: Step count for the role.
        progress_percent: Step position as a percentage.
        draft: Profile fields collected so far.
        missing_fields: Required step 1 fields still empty.
        resume: Resume selection (job seekers only).
        actions: Controls to render, with their enabled state.
        handed_off_to_builder: True once the AI resume builder was engaged.
    """

    status: Literal["in_progress", "completed"]
    role: str
    step: str
    step_number: int
    total_steps: int
    progress_percent: int
    draft: DraftSnapshot
    missing_fields: list[str]
    resume: ResumeSnapshot | None = None
    actions: list[ActionSnapshot]
    handed_off_to_builder: bool = False

    @classmethod
    def from_controller(
        cls, controller: OnboardingController
    ) -> "OnboardingSessionResponse":
        """Build the snapshot from a live or just-completed flow."""
        machine = controller.machine
        draft = machine.draft
        completed = machine.is_completed
        # Every control is disabled while the completion save is pending.
        saving = controller.is_completing

        resume = None
        if machine.role is UserRole.JOB_SEEKER:
            ref = machine.resume.uploaded_file
            resume = ResumeSnapshot(
                mode=machine.resume.mode.value,
                uploaded_file=(
                    UploadedResumeSnapshot(
                        upload_id=ref.upload_id,
                        filename=ref.filename,
                        content_type=ref.content_type,
                        size_bytes=ref.size_bytes,
                    )
                    if ref is not None
                    else None
                ),
            )

        return cls(
            status="completed" if completed else "in_progress",
            role=machine.role.value,
            step=machine.current_step.value,
            step_number=machine.step_number,
            total_steps=machine.total_steps,
            progress_percent=machine.progress_percent(),
            draft=DraftSnapshot(
                name=draft.name,
                phone=draft.phone,
                location=draft.location,
                bio=draft.bio,
                company=draft.company,
                industry=draft.industry,
            ),
            missing_fields=missing_required_fields(draft),
            resume=resume,
            actions=(
                []
                if completed
                else [
                    ActionSnapshot(
                        action=item.action.value,
                        enabled=item.enabled and not saving,
                    )
                    for item in machine.available_actions()
                ]
            ),
            handed_off_to_builder=bool(
                controller.result and controller.result.handed_off_to_builder
            ),
        )
