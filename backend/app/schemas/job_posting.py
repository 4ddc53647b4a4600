"""Job posting schemas.

Requests accept what the employer dashboard form sends; requirements may
arrive as a list or a comma-separated string and are normalized before
storage.
"""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.services.job_posting_service import parse_requirements

EmploymentType = Literal["Full-time", "Part-time", "Contract", "Internship"]


class CreateJobPostingRequest(BaseModel):
    """Request body for POST /job-postings.

    Attributes:
        title: Job title (required).
        company: Hiring company (required).
        location: Location; include "Remote" for remote roles (required).
        employment_type: Full-time, Part-time, Contract or Internship.
        salary: Free-form salary text.
        description: Full job description (required).
        requirements: List or comma-separated string of requirements.
        status: Publish immediately ("active") or save as "draft".
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    employment_type: EmploymentType = "Full-time"
    salary: str = Field(default="", max_length=100)
    description: str = Field(..., min_length=1, max_length=50000)
    requirements: list[str] = Field(default_factory=list, max_length=50)
    status: Literal["active", "draft"] = "active"

    @field_validator("title", "company", "location", "salary", "description", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("requirements", mode="before")
    @classmethod
    def split_requirements(cls, v: str | list[str] | None) -> list[str]:
        return parse_requirements(v)


class UpdateJobPostingStatusRequest(BaseModel):
    """Request body for PATCH /job-postings/{id}/status."""

    model_config = ConfigDict(extra="forbid")

    status: Literal["active", "draft", "closed"]


class GenerateDescriptionRequest(BaseModel):
    """Request body for POST /job-postings/generate-description.

    Title and company are required; the rest improve the result.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str | None = Field(default=None, max_length=255)
    salary: str | None = Field(default=None, max_length=100)
    requirements: list[str] = Field(default_factory=list, max_length=50)

    @field_validator("title", "company", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("requirements", mode="before")
    @classmethod
    def split_requirements(cls, v: str | list[str] | None) -> list[str]:
        return parse_requirements(v)


class GeneratedDescriptionResponse(BaseModel):
    description: str


class JobPostingResponse(BaseModel):
    """A job listing."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employer_id: uuid.UUID
    title: str
    company: str
    location: str
    employment_type: str
    salary: str
    description: str
    requirements: list[str]
    tags: list[str]
    status: str
    created_at: datetime
    updated_at: datetime
