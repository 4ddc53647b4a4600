"""Profiles API router.

Endpoints:
- POST /profiles     Create the caller's profile at sign-up.
- GET  /profiles/me  The caller's profile.
"""

import structlog
from fastapi import APIRouter, status

from app.api.deps import CurrentIdentity, CurrentUserId, DbSession
from app.core.errors import ConflictError, NotFoundError
from app.core.responses import DataResponse
from app.repositories.profile_repository import ProfileRepository
from app.schemas.profile import CreateProfileRequest, ProfileResponse

logger = structlog.get_logger()

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_profile(
    body: CreateProfileRequest,
    identity: CurrentIdentity,
    db: DbSession,
) -> DataResponse[ProfileResponse]:
    """Create the caller's profile with their role.

    The role cannot be changed afterwards. Onboarding fills in the rest.

    Raises:
        ConflictError: If the caller already has a profile.
    """
    existing = await ProfileRepository.get_by_user_id(db, identity.user_id)
    if existing is not None:
        raise ConflictError(
            code="PROFILE_EXISTS",
            message="A profile already exists for this account.",
        )

    profile = await ProfileRepository.create(
        db,
        user_id=identity.user_id,
        name=body.name,
        email=body.email or identity.email or "",
        user_type=body.user_type,
    )
    logger.info(
        "profile_created",
        user_id=str(identity.user_id),
        user_type=body.user_type,
    )
    return DataResponse(data=ProfileResponse.model_validate(profile))


@router.get("/me")
async def get_my_profile(
    user_id: CurrentUserId,
    db: DbSession,
) -> DataResponse[ProfileResponse]:
    """Get the caller's profile.

    Raises:
        NotFoundError: If the caller has no profile yet.
    """
    profile = await ProfileRepository.get_by_user_id(db, user_id)
    if profile is None:
        raise NotFoundError("Profile")
    return DataResponse(data=ProfileResponse.model_validate(profile))
