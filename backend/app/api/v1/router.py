"""API v1 router aggregator.

All v1 endpoint routers are included here under the /api/v1 prefix.
"""

from fastapi import APIRouter

from app.api.v1 import assistant, job_postings, onboarding, profiles

router = APIRouter()

# =============================================================================
# Profiles & Onboarding
# =============================================================================

router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
router.include_router(onboarding.router, prefix="/onboarding", tags=["onboarding"])

# =============================================================================
# Job Postings
# =============================================================================

router.include_router(
    job_postings.router, prefix="/job-postings", tags=["job-postings"]
)

# =============================================================================
# Career Assistant
# =============================================================================

router.include_router(assistant.router, prefix="/assistant", tags=["assistant"])
