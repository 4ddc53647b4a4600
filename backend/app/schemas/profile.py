"""Profile schemas."""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateProfileRequest(BaseModel):
    """Request body for POST /profiles (sign-up).

    Attributes:
        name: Display name entered at sign-up.
        email: Contact email. Defaults to the identity email claim.
        user_type: Marketplace role, fixed for the life of the profile.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    user_type: Literal["job_seeker", "employer"]

    @field_validator("name", "email", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str | None) -> str | None:
        if isinstance(v, str):
            return v.strip()
        return v


class ProfileResponse(BaseModel):
    """A stored profile."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    email: str
    name: str
    phone: str | None = None
    location: str | None = None
    bio: str | None = None
    company: str | None = None
    industry: str | None = None
    user_type: str
    onboarding_completed: bool
    created_at: datetime
    updated_at: datetime
