"""Onboarding state machine.

Owns the current step, the role-specific step sequence, the profile draft
and the resume selection, and validates every transition:

    basic_info --next--> step 2
    resume_upload --continue (file chosen)--> resume_builder_choice
    resume_upload --create_with_ai--> resume_builder_choice
    resume_upload --skip--> complete
    company_review --complete_setup--> complete
    resume_builder_choice --continue_to_builder--> complete
    resume_builder_choice --back_to_upload--> resume_upload
    any step --previous--> step - 1 (no-op on step 1)

All transitions are in-memory. Terminal actions are reported to the caller
(OnboardingController), which performs the single persistence call and then
calls mark_completed().
"""

from dataclasses import dataclass

from app.core.errors import InvalidStateError
from app.services.onboarding_errors import OnboardingValidationError
from app.services.onboarding_steps import (
    JUMP_TARGETS,
    STEP_ACTIONS,
    TERMINAL_ACTIONS,
    OnboardingAction,
    OnboardingStep,
    steps_for_role,
    total_steps,
)
from app.services.onboarding_types import (
    ProfileDraft,
    ResumeMode,
    ResumeSelection,
    UserRole,
)
from app.services.onboarding_validation import (
    is_resume_step_satisfied,
    is_step1_valid,
    missing_required_fields,
)
from app.services.resume_acquisition import choose_ai_path

_MISSING_FIELDS_MSG = "Please fill in all required fields."
_RESUME_REQUIRED_MSG = "Choose a PDF resume to continue."


@dataclass(frozen=True)
class ActionAvailability:
    """Whether an action is offered on the current step and its guard passes."""

    action: OnboardingAction
    enabled: bool


@dataclass(frozen=True)
class Transition:
    """Result of a successful advance().

    Attributes:
        action: The action that was applied.
        from_step: Step before the action.
        to_step: Step after the action (unchanged for terminal actions,
            which only complete once persistence succeeds).
        completes: True if the action finishes the flow.
        resume: The resume selection the flow carries after this action.
    """

    action: OnboardingAction
    from_step: OnboardingStep
    to_step: OnboardingStep
    completes: bool
    resume: ResumeSelection


class OnboardingStateMachine:
    """Drives one onboarding flow for one role.

    The role is fixed at construction. The draft is owned exclusively by
    this instance for the lifetime of the flow.
    """

    def __init__(self, role: UserRole, draft: ProfileDraft | None = None) -> None:
        if draft is None:
            draft = ProfileDraft(role=role)
        elif draft.role is not role:
            raise ValueError("draft role does not match flow role")
        self._role = role
        self._steps = steps_for_role(role)
        self._index = 0
        self._draft = draft
        self._resume = ResumeSelection()
        self._completed = False

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def draft(self) -> ProfileDraft:
        return self._draft

    @property
    def resume(self) -> ResumeSelection:
        return self._resume

    @property
    def current_step(self) -> OnboardingStep:
        return self._steps[self._index]

    @property
    def step_number(self) -> int:
        """1-indexed position of the current step."""
        return self._index + 1

    @property
    def total_steps(self) -> int:
        return total_steps(self._role)

    @property
    def is_completed(self) -> bool:
        return self._completed

    def progress_percent(self) -> int:
        """Progress through the wizard, as shown next to the step counter."""
        return round(self.step_number / self.total_steps * 100)

    def is_terminal_eligible(self) -> bool:
        """True if a terminal action is offered on the current step."""
        return bool(TERMINAL_ACTIONS.intersection(STEP_ACTIONS[self.current_step]))

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def offered_actions(self) -> tuple[OnboardingAction, ...]:
        """Actions the current step offers, PREVIOUS first."""
        return (OnboardingAction.PREVIOUS, *STEP_ACTIONS[self.current_step])

    def available_actions(self) -> list[ActionAvailability]:
        """Offered actions with their guard state, for rendering controls."""
        return [
            ActionAvailability(action=action, enabled=self._guard_passes(action))
            for action in self.offered_actions()
        ]

    def _guard_passes(self, action: OnboardingAction) -> bool:
        if action is OnboardingAction.PREVIOUS:
            return self._index > 0
        if action is OnboardingAction.NEXT:
            return is_step1_valid(self._draft)
        if action is OnboardingAction.CONTINUE:
            return is_resume_step_satisfied(self._resume)
        return True

    def set_resume(self, selection: ResumeSelection) -> None:
        """Record a resume selection made on the upload step.

        Raises:
            InvalidStateError: If the current step is not the upload step.
        """
        self._ensure_active()
        if self.current_step is not OnboardingStep.RESUME_UPLOAD:
            raise InvalidStateError("Resume can only be chosen on the upload step.")
        self._resume = selection

    def advance(self, action: OnboardingAction) -> Transition:
        """Apply a user action.

        Non-terminal actions move the step immediately. Terminal actions
        leave the step unchanged and return completes=True; the caller
        persists and then calls mark_completed().

        Args:
            action: The requested action.

        Returns:
            Transition describing the move.

        Raises:
            OnboardingValidationError: If the action's guard fails.
            InvalidStateError: If the action is not offered on this step or
                the flow has already completed.
        """
        self._ensure_active()
        from_step = self.current_step
        if action not in self.offered_actions():
            raise InvalidStateError(
                f"Action '{action.value}' is not available on step '{from_step.value}'."
            )

        if action is OnboardingAction.NEXT and not is_step1_valid(self._draft):
            raise OnboardingValidationError(
                _MISSING_FIELDS_MSG,
                missing_fields=missing_required_fields(self._draft),
            )
        if action is OnboardingAction.CONTINUE and not is_resume_step_satisfied(
            self._resume
        ):
            raise OnboardingValidationError(_RESUME_REQUIRED_MSG)

        if action in TERMINAL_ACTIONS:
            resume = (
                ResumeSelection(mode=ResumeMode.NONE)
                if action is OnboardingAction.SKIP
                else self._resume
            )
            return Transition(
                action=action,
                from_step=from_step,
                to_step=from_step,
                completes=True,
                resume=resume,
            )

        if action is OnboardingAction.PREVIOUS:
            self._index = max(0, self._index - 1)
        elif action is OnboardingAction.CREATE_WITH_AI:
            self._resume = choose_ai_path()
            self._index = self._steps.index(JUMP_TARGETS[action])
        elif action in JUMP_TARGETS:
            self._index = self._steps.index(JUMP_TARGETS[action])
        else:
            self._index += 1

        return Transition(
            action=action,
            from_step=from_step,
            to_step=self.current_step,
            completes=False,
            resume=self._resume,
        )

    def mark_completed(self, resume: ResumeSelection) -> None:
        """Record a successful completion. Called once, after persistence."""
        self._ensure_active()
        self._resume = resume
        self._completed = True

    def _ensure_active(self) -> None:
        if self._completed:
            raise InvalidStateError("Onboarding is already complete.")
