"""Tests for job posting status transitions.

Tests verify:
1. Status enum values match the database check constraint
2. Publishing and closing are allowed
3. Closed is terminal and publishing is one-way
"""

import pytest

from app.services.job_posting_status import (
    InvalidStatusTransitionError,
    JobPostingStatus,
    get_valid_transitions,
    is_valid_transition,
    transition_status,
)


class TestJobPostingStatus:
    """Tests for JobPostingStatus values."""

    def test_values_match_check_constraint(self) -> None:
        assert {s.value for s in JobPostingStatus} == {"active", "draft", "closed"}

    def test_from_string_parses_database_value(self) -> None:
        assert JobPostingStatus.from_string("draft") is JobPostingStatus.DRAFT

    def test_from_string_rejects_unknown_value(self) -> None:
        with pytest.raises(ValueError, match="Invalid job posting status"):
            JobPostingStatus.from_string("Active")


class TestValidTransitions:
    """Allowed moves between statuses."""

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (JobPostingStatus.DRAFT, JobPostingStatus.ACTIVE),
            (JobPostingStatus.DRAFT, JobPostingStatus.CLOSED),
            (JobPostingStatus.ACTIVE, JobPostingStatus.CLOSED),
        ],
    )
    def test_allows_transition(
        self, current: JobPostingStatus, target: JobPostingStatus
    ) -> None:
        assert is_valid_transition(current, target)
        assert transition_status(current, target) is target


class TestInvalidTransitions:
    """Rejected moves between statuses."""

    def test_active_cannot_return_to_draft(self) -> None:
        """Publishing is one-way."""
        assert not is_valid_transition(JobPostingStatus.ACTIVE, JobPostingStatus.DRAFT)

    def test_closed_is_terminal(self) -> None:
        assert get_valid_transitions(JobPostingStatus.CLOSED) == []

    def test_same_status_is_not_a_transition(self) -> None:
        assert not is_valid_transition(JobPostingStatus.ACTIVE, JobPostingStatus.ACTIVE)

    def test_transition_status_raises_with_valid_targets(self) -> None:
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            transition_status(JobPostingStatus.ACTIVE, JobPostingStatus.DRAFT)

        error = exc_info.value
        assert error.status_code == 422
        assert error.code == "INVALID_STATUS_TRANSITION"
        assert error.valid_transitions == [JobPostingStatus.CLOSED]
        assert "active" in error.message
        assert "draft" in error.message

    def test_terminal_state_message(self) -> None:
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            transition_status(JobPostingStatus.CLOSED, JobPostingStatus.ACTIVE)

        assert "terminal state" in exc_info.value.message
