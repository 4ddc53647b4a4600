"""Job Postings API router.

Employers publish listings; every signed-in user browses active ones.

Endpoints:
- POST  /job-postings                        Create a listing (employers).
- GET   /job-postings                        Browse active listings.
- GET   /job-postings/mine                   The employer's own listings.
- PATCH /job-postings/{id}/status            Change a listing's status.
- POST  /job-postings/generate-description   AI-written description draft.
"""

import uuid
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query, Request, status

from app.api.deps import CurrentUserId, DbSession
from app.core.config import settings
from app.core.errors import NotFoundError
from app.core.pagination import PaginationParams, pagination_params
from app.core.rate_limiting import limiter
from app.core.responses import DataResponse, ListResponse, PaginationMeta
from app.repositories.job_posting_repository import JobPostingRepository
from app.repositories.profile_repository import ProfileRepository
from app.schemas.job_posting import (
    CreateJobPostingRequest,
    GenerateDescriptionRequest,
    GeneratedDescriptionResponse,
    JobPostingResponse,
    UpdateJobPostingStatusRequest,
)
from app.services.job_description_generation import generate_job_description
from app.services.job_posting_service import derive_tags, ensure_can_post
from app.services.job_posting_status import JobPostingStatus, transition_status

logger = structlog.get_logger()

router = APIRouter()

_RESOURCE = "Job posting"


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_job_posting(
    body: CreateJobPostingRequest,
    user_id: CurrentUserId,
    db: DbSession,
) -> DataResponse[JobPostingResponse]:
    """Publish (or save as draft) a new listing.

    Raises:
        ForbiddenError: If the caller is not an onboarded employer.
    """
    ensure_can_post(await ProfileRepository.get_by_user_id(db, user_id))

    job_posting = await JobPostingRepository.create(
        db,
        employer_id=user_id,
        title=body.title,
        company=body.company,
        location=body.location,
        description=body.description,
        employment_type=body.employment_type,
        salary=body.salary,
        requirements=body.requirements,
        tags=derive_tags(
            employment_type=body.employment_type,
            location=body.location,
            salary=body.salary,
        ),
        status=body.status,
    )
    logger.info(
        "job_posting_created",
        user_id=str(user_id),
        job_posting_id=str(job_posting.id),
        status=job_posting.status,
    )
    return DataResponse(data=JobPostingResponse.model_validate(job_posting))


@router.get("")
async def list_job_postings(
    _user_id: CurrentUserId,
    db: DbSession,
    pagination: Annotated[PaginationParams, Depends(pagination_params)],
    q: Annotated[str | None, Query(max_length=200)] = None,
    location: Annotated[str | None, Query(max_length=200)] = None,
) -> ListResponse[JobPostingResponse]:
    """Browse active listings, newest first."""
    postings, total = await JobPostingRepository.list_active(
        db,
        query=q,
        location=location,
        offset=pagination.offset,
        limit=pagination.limit,
    )
    return ListResponse(
        data=[JobPostingResponse.model_validate(p) for p in postings],
        meta=PaginationMeta(
            total=total, page=pagination.page, per_page=pagination.per_page
        ),
    )


@router.get("/mine")
async def list_my_job_postings(
    user_id: CurrentUserId,
    db: DbSession,
) -> ListResponse[JobPostingResponse]:
    """List the caller's own listings in every status."""
    postings = await JobPostingRepository.list_by_employer(db, user_id)
    return ListResponse(
        data=[JobPostingResponse.model_validate(p) for p in postings],
        meta=PaginationMeta(total=len(postings), page=1, per_page=max(len(postings), 1)),
    )


@router.patch("/{job_posting_id}/status")
async def update_job_posting_status(
    job_posting_id: uuid.UUID,
    body: UpdateJobPostingStatusRequest,
    user_id: CurrentUserId,
    db: DbSession,
) -> DataResponse[JobPostingResponse]:
    """Move a listing through draft → active → closed.

    Raises:
        NotFoundError: If the listing does not exist or is not the caller's.
        InvalidStatusTransitionError: If the transition is not allowed.
    """
    job_posting = await JobPostingRepository.get_by_id(db, job_posting_id)
    if job_posting is None or job_posting.employer_id != user_id:
        raise NotFoundError(_RESOURCE, str(job_posting_id))

    new_status = transition_status(
        JobPostingStatus.from_string(job_posting.status),
        JobPostingStatus(body.status),
    )
    job_posting = await JobPostingRepository.set_status(db, job_posting, new_status.value)
    logger.info(
        "job_posting_status_changed",
        job_posting_id=str(job_posting_id),
        status=new_status.value,
    )
    return DataResponse(data=JobPostingResponse.model_validate(job_posting))


@router.post("/generate-description")
@limiter.limit(settings.rate_limit_llm)
async def generate_description(
    request: Request,  # noqa: ARG001
    body: GenerateDescriptionRequest,
    user_id: CurrentUserId,
    db: DbSession,
) -> DataResponse[GeneratedDescriptionResponse]:
    """Draft a job description with the AI service.

    Raises:
        ForbiddenError: If the caller is not an onboarded employer.
        GenerationUnavailableError: If the AI service fails.
    """
    ensure_can_post(await ProfileRepository.get_by_user_id(db, user_id))

    description = await generate_job_description(
        title=body.title,
        company=body.company,
        location=body.location,
        salary=body.salary,
        requirements=body.requirements,
    )
    return DataResponse(data=GeneratedDescriptionResponse(description=description))
