"""Tests for employer job posting rules.

Covers requirements parsing, tag derivation and the employer posting guard.
"""

import pytest

from app.core.errors import ForbiddenError
from app.models.profile import Profile
from app.services.job_posting_service import (
    derive_tags,
    ensure_can_post,
    parse_requirements,
)


def _profile(**overrides: object) -> Profile:
    fields: dict = {
        "name": "Grace Hopper",
        "user_type": "employer",
        "onboarding_completed": True,
    }
    fields.update(overrides)
    return Profile(**fields)


class TestParseRequirements:
    def test_splits_comma_separated_string(self) -> None:
        assert parse_requirements("Python, SQL ,  FastAPI") == [
            "Python",
            "SQL",
            "FastAPI",
        ]

    def test_drops_blank_entries(self) -> None:
        assert parse_requirements("Python,, ,SQL,") == ["Python", "SQL"]

    def test_list_items_are_trimmed(self) -> None:
        assert parse_requirements([" Go ", "", "Rust"]) == ["Go", "Rust"]

    def test_none_is_empty(self) -> None:
        assert parse_requirements(None) == []


class TestDeriveTags:
    def test_remote_with_disclosed_salary(self) -> None:
        tags = derive_tags(
            employment_type="Full-time",
            location="Remote (US)",
            salary="$120k - $160k",
        )

        assert tags == ["Full-time", "Remote", "Competitive Salary"]

    def test_on_site_without_salary(self) -> None:
        tags = derive_tags(employment_type="Contract", location="Austin, TX", salary="")

        assert tags == ["Contract", "On-site", "Salary Negotiable"]

    def test_salary_without_dollar_figure_is_negotiable(self) -> None:
        tags = derive_tags(employment_type="Internship", location="NYC", salary="DOE")

        assert tags[-1] == "Salary Negotiable"

    def test_empty_employment_type_is_dropped(self) -> None:
        assert derive_tags(employment_type="", location="Remote", salary="$1") == [
            "Remote",
            "Competitive Salary",
        ]


class TestEnsureCanPost:
    def test_onboarded_employer_may_post(self) -> None:
        profile = _profile()

        assert ensure_can_post(profile) is profile

    def test_missing_profile_is_forbidden(self) -> None:
        with pytest.raises(ForbiddenError, match="Only employers"):
            ensure_can_post(None)

    def test_job_seeker_is_forbidden(self) -> None:
        with pytest.raises(ForbiddenError, match="Only employers"):
            ensure_can_post(_profile(user_type="job_seeker"))

    def test_employer_mid_onboarding_is_forbidden(self) -> None:
        with pytest.raises(ForbiddenError, match="Complete your company profile"):
            ensure_can_post(_profile(onboarding_completed=False))
