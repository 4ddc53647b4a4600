"""Onboarding API router.

Drives one in-memory onboarding flow per user across requests. Nothing is
written to the database until a terminal action completes the flow.

Endpoints:
- POST   /onboarding/session          Start (or restart) the caller's flow.
- GET    /onboarding/session          Current snapshot.
- PATCH  /onboarding/session/draft    Update draft fields.
- POST   /onboarding/session/resume   Upload a PDF resume (job seekers).
- POST   /onboarding/session/actions  Apply a wizard action.
- DELETE /onboarding/session          Abandon the flow.
"""

import uuid
from typing import Annotated

import structlog
from fastapi import APIRouter, File, Request, Response, UploadFile, status

from app.api.deps import (
    CurrentIdentity,
    CurrentUserId,
    DbSession,
    ProfileStore,
    SessionStore,
)
from app.core.config import settings
from app.core.errors import InvalidStateError, NotFoundError
from app.core.file_validation import detect_mime_type, read_file_with_size_limit
from app.core.rate_limiting import limiter
from app.core.responses import DataResponse
from app.repositories.profile_repository import ProfileRepository
from app.schemas.onboarding import (
    OnboardingActionRequest,
    OnboardingSessionResponse,
    UpdateDraftRequest,
)
from app.services.onboarding_controller import OnboardingController
from app.services.onboarding_errors import RejectedFileError
from app.services.onboarding_session_store import OnboardingSessionStore
from app.services.onboarding_types import UserRole
from app.services.resume_acquisition import ResumeFile

logger = structlog.get_logger()

router = APIRouter()

_SESSION_RESOURCE = "Onboarding session"


def _require_session(
    store: OnboardingSessionStore, user_id: uuid.UUID
) -> OnboardingController:
    controller = store.get(user_id)
    if controller is None:
        raise NotFoundError(_SESSION_RESOURCE)
    return controller


@router.post("/session", status_code=status.HTTP_201_CREATED)
async def start_onboarding(
    identity: CurrentIdentity,
    db: DbSession,
    store: SessionStore,
    persistence: ProfileStore,
) -> DataResponse[OnboardingSessionResponse]:
    """Start the caller's onboarding flow.

    The role comes from the profile created at sign-up; the name is seeded
    from the profile or the identity claim. Any live flow is replaced.

    Raises:
        NotFoundError: If the caller has no profile.
        InvalidStateError: If onboarding is already complete.
    """
    profile = await ProfileRepository.get_by_user_id(db, identity.user_id)
    if profile is None:
        raise NotFoundError("Profile")
    if profile.onboarding_completed:
        raise InvalidStateError("Onboarding is already complete.")

    controller = OnboardingController(
        identity.user_id,
        UserRole(profile.user_type),
        persistence,
        seed_name=profile.name or identity.name or "",
        persist_timeout_seconds=settings.onboarding_persist_timeout_seconds,
    )
    store.start(controller)
    logger.info(
        "onboarding_started",
        user_id=str(identity.user_id),
        role=profile.user_type,
    )
    return DataResponse(data=OnboardingSessionResponse.from_controller(controller))


@router.get("/session")
async def get_onboarding_session(
    user_id: CurrentUserId,
    store: SessionStore,
) -> DataResponse[OnboardingSessionResponse]:
    """Get the caller's live flow."""
    controller = _require_session(store, user_id)
    return DataResponse(data=OnboardingSessionResponse.from_controller(controller))


@router.patch("/session/draft")
async def update_onboarding_draft(
    body: UpdateDraftRequest,
    user_id: CurrentUserId,
    store: SessionStore,
) -> DataResponse[OnboardingSessionResponse]:
    """Update draft fields. Only fields present in the body change."""
    controller = _require_session(store, user_id)
    controller.update_draft(**body.model_dump(exclude_unset=True))
    return DataResponse(data=OnboardingSessionResponse.from_controller(controller))


@router.post("/session/resume")
@limiter.limit(settings.rate_limit_upload)
async def upload_onboarding_resume(
    request: Request,  # noqa: ARG001
    file: Annotated[UploadFile, File(...)],
    user_id: CurrentUserId,
    store: SessionStore,
) -> DataResponse[OnboardingSessionResponse]:
    """Choose an existing PDF resume on the upload step.

    Both the declared content type and the sniffed content must be PDF.
    The file is not stored; only a reference is kept for the flow.

    Raises:
        RejectedFileError: If the file is not a PDF. The flow is unchanged.
        ValidationError: If the file exceeds the size limit.
    """
    controller = _require_session(store, user_id)
    content = await read_file_with_size_limit(
        file, settings.resume_upload_max_size_mb * 1024 * 1024
    )
    filename = file.filename or "resume.pdf"

    if detect_mime_type(content, filename) is None:
        raise RejectedFileError()

    controller.submit_resume(
        ResumeFile(
            filename=filename,
            content_type=file.content_type or "",
            size_bytes=len(content),
        )
    )
    return DataResponse(data=OnboardingSessionResponse.from_controller(controller))


@router.post("/session/actions")
async def perform_onboarding_action(
    body: OnboardingActionRequest,
    user_id: CurrentUserId,
    store: SessionStore,
) -> DataResponse[OnboardingSessionResponse]:
    """Apply a wizard action.

    Terminal actions save the profile. On success the snapshot reports
    status "completed" and the flow is dropped. On a failed save the flow
    is kept unchanged so the same action can be retried. A flow abandoned
    while its save was pending no longer exists and answers 404.
    """
    controller = _require_session(store, user_id)
    await controller.perform(body.action)
    if controller.is_abandoned:
        raise NotFoundError(_SESSION_RESOURCE)

    snapshot = OnboardingSessionResponse.from_controller(controller)
    if controller.machine.is_completed:
        store.remove(controller)
    return DataResponse(data=snapshot)


@router.delete("/session", status_code=status.HTTP_204_NO_CONTENT)
async def abandon_onboarding(
    user_id: CurrentUserId,
    store: SessionStore,
) -> Response:
    """Abandon the caller's flow. Nothing is saved."""
    if not store.discard(user_id):
        raise NotFoundError(_SESSION_RESOURCE)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
