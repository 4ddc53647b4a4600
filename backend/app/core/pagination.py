"""Pagination utilities for list endpoints.

page is 1-indexed (default 1); per_page defaults to 20 and is capped at 100.
"""

from dataclasses import dataclass

from fastapi import Query

DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 100


@dataclass
class PaginationParams:
    """Validated pagination query parameters.

    Attributes:
        page: Current page number (1-indexed).
        per_page: Number of items per page.
    """

    page: int
    per_page: int

    @property
    def offset(self) -> int:
        """Rows to skip for the current page (0 for page 1)."""
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        """Maximum rows to return for the current page."""
        return self.per_page


def pagination_params(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    per_page: int = Query(
        default=DEFAULT_PER_PAGE,
        ge=1,
        le=MAX_PER_PAGE,
        description=f"Items per page (max {MAX_PER_PAGE})",
    ),
) -> PaginationParams:
    """FastAPI dependency for pagination query parameters.

    Usage:
        @router.get("")
        async def list_job_postings(
            pagination: Annotated[PaginationParams, Depends(pagination_params)],
        ):
            postings, total = await JobPostingRepository.list_active(
                db, offset=pagination.offset, limit=pagination.limit
            )
    """
    return PaginationParams(page=page, per_page=per_page)
