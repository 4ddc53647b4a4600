"""Job posting status transitions.

Implements a state machine for employer listing statuses:
- draft → active, closed
- active → closed
- closed → (terminal, no transitions)

Publishing is one-way: an active listing cannot go back to draft.
"""

from enum import Enum

from app.core.errors import APIError

# =============================================================================
# Exceptions
# =============================================================================


class InvalidStatusTransitionError(APIError):
    """Raised when attempting an invalid status transition (422)."""

    def __init__(
        self,
        current_status: "JobPostingStatus",
        target_status: "JobPostingStatus",
        valid_transitions: list["JobPostingStatus"],
    ) -> None:
        self.current_status = current_status
        self.target_status = target_status
        self.valid_transitions = valid_transitions
        valid_names = [s.value for s in valid_transitions]
        super().__init__(
            code="INVALID_STATUS_TRANSITION",
            message=(
                f"Cannot transition from {current_status.value} to {target_status.value}. "
                f"Valid transitions: {valid_names or 'none (terminal state)'}"
            ),
            status_code=422,
        )


# =============================================================================
# Enums
# =============================================================================


class JobPostingStatus(Enum):
    """Job posting status values.

    Values match the ck_job_postings_status check constraint.
    """

    ACTIVE = "active"
    DRAFT = "draft"
    CLOSED = "closed"

    @classmethod
    def from_string(cls, value: str) -> "JobPostingStatus":
        """Convert a database string to enum.

        Raises:
            ValueError: If the string doesn't match any status.
        """
        for status in cls:
            if status.value == value:
                return status
        valid = [s.value for s in cls]
        raise ValueError(f"Invalid job posting status: '{value}'. Valid: {valid}")


# Keys are the current status, values the allowed targets.
_VALID_TRANSITIONS: dict[JobPostingStatus, list[JobPostingStatus]] = {
    JobPostingStatus.DRAFT: [
        JobPostingStatus.ACTIVE,
        JobPostingStatus.CLOSED,
    ],
    JobPostingStatus.ACTIVE: [
        JobPostingStatus.CLOSED,
    ],
    JobPostingStatus.CLOSED: [],  # Terminal state
}


# =============================================================================
# Public Functions
# =============================================================================


def is_valid_transition(
    current: JobPostingStatus,
    target: JobPostingStatus,
) -> bool:
    """Check if a status transition is valid."""
    return target in _VALID_TRANSITIONS.get(current, [])


def get_valid_transitions(status: JobPostingStatus) -> list[JobPostingStatus]:
    """Get valid target statuses from current status."""
    return _VALID_TRANSITIONS.get(status, [])


def transition_status(
    current: JobPostingStatus,
    target: JobPostingStatus,
) -> JobPostingStatus:
    """Validate a status transition.

    Args:
        current: The listing's current status.
        target: The desired status.

    Returns:
        The new status.

    Raises:
        InvalidStatusTransitionError: If the transition is not allowed.
    """
    if not is_valid_transition(current, target):
        raise InvalidStatusTransitionError(
            current_status=current,
            target_status=target,
            valid_transitions=get_valid_transitions(current),
        )
    return target
