"""Step and action definitions for the onboarding flow.

The per-role step sequence is a configuration table: adding a role or a
step means editing ROLE_STEP_SEQUENCES and STEP_ACTIONS, not the state
machine.
"""

from enum import Enum

from app.services.onboarding_types import UserRole


class OnboardingStep(Enum):
    """Screens of the onboarding wizard."""

    BASIC_INFO = "basic_info"
    RESUME_UPLOAD = "resume_upload"
    COMPANY_REVIEW = "company_review"
    RESUME_BUILDER_CHOICE = "resume_builder_choice"


class OnboardingAction(Enum):
    """User actions that drive the onboarding flow."""

    NEXT = "next"
    PREVIOUS = "previous"
    CONTINUE = "continue"
    CREATE_WITH_AI = "create_with_ai"
    SKIP = "skip"
    COMPLETE_SETUP = "complete_setup"
    CONTINUE_TO_BUILDER = "continue_to_builder"
    BACK_TO_UPLOAD = "back_to_upload"


# WHY: Tuple order is the wizard order; index + 1 is the step number.
ROLE_STEP_SEQUENCES: dict[UserRole, tuple[OnboardingStep, ...]] = {
    UserRole.JOB_SEEKER: (
        OnboardingStep.BASIC_INFO,
        OnboardingStep.RESUME_UPLOAD,
        OnboardingStep.RESUME_BUILDER_CHOICE,
    ),
    UserRole.EMPLOYER: (
        OnboardingStep.BASIC_INFO,
        OnboardingStep.COMPANY_REVIEW,
    ),
}

# Actions offered on each step (besides PREVIOUS, which every step offers).
STEP_ACTIONS: dict[OnboardingStep, tuple[OnboardingAction, ...]] = {
    OnboardingStep.BASIC_INFO: (OnboardingAction.NEXT,),
    OnboardingStep.RESUME_UPLOAD: (
        OnboardingAction.CONTINUE,
        OnboardingAction.CREATE_WITH_AI,
        OnboardingAction.SKIP,
    ),
    OnboardingStep.COMPANY_REVIEW: (OnboardingAction.COMPLETE_SETUP,),
    OnboardingStep.RESUME_BUILDER_CHOICE: (
        OnboardingAction.BACK_TO_UPLOAD,
        OnboardingAction.CONTINUE_TO_BUILDER,
    ),
}

# Actions that finish the flow (persist and exit).
TERMINAL_ACTIONS: frozenset[OnboardingAction] = frozenset(
    {
        OnboardingAction.SKIP,
        OnboardingAction.COMPLETE_SETUP,
        OnboardingAction.CONTINUE_TO_BUILDER,
    }
)

# Explicit jump targets; NEXT and CONTINUE move to the following step instead.
JUMP_TARGETS: dict[OnboardingAction, OnboardingStep] = {
    OnboardingAction.CREATE_WITH_AI: OnboardingStep.RESUME_BUILDER_CHOICE,
    OnboardingAction.BACK_TO_UPLOAD: OnboardingStep.RESUME_UPLOAD,
}


def steps_for_role(role: UserRole) -> tuple[OnboardingStep, ...]:
    """Get the ordered step sequence for a role."""
    return ROLE_STEP_SEQUENCES[role]


def total_steps(role: UserRole) -> int:
    """Number of wizard steps for a role (3 for job seekers, 2 for employers)."""
    return len(ROLE_STEP_SEQUENCES[role])


def terminal_steps(role: UserRole) -> frozenset[OnboardingStep]:
    """Steps from which a terminal action may complete the flow."""
    return frozenset(
        step
        for step in ROLE_STEP_SEQUENCES[role]
        if TERMINAL_ACTIONS.intersection(STEP_ACTIONS[step])
    )
