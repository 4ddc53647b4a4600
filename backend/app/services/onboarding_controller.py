"""Onboarding controller - the caller-facing side of the onboarding flow.

Wraps OnboardingStateMachine, performs the single persistence call when a
terminal action is taken, and hands job seekers off to AI resume authoring.

Completion guarantees:
1. At most one persistence call is in flight per flow. While it is pending
   every input and action is rejected with CompletionInProgressError.
2. A failed or timed-out save raises PersistenceError and leaves the step
   and draft untouched, so a user-triggered retry re-sends the same payload.
   There is no automatic retry.
3. Once a save succeeds the flow is completed and cannot complete again.
4. If the flow is abandoned while a save is in flight, the outcome is
   ignored, success or failure, and no flow state is mutated.
"""

import asyncio
import uuid
from dataclasses import dataclass
from typing import Protocol

import structlog

from app.core.errors import APIError, InvalidStateError, ValidationError
from app.services.onboarding_errors import (
    CompletionInProgressError,
    OnboardingValidationError,
    PersistenceError,
)
from app.services.onboarding_flow import OnboardingStateMachine, Transition
from app.services.onboarding_steps import (
    STEP_ACTIONS,
    TERMINAL_ACTIONS,
    OnboardingAction,
)
from app.services.onboarding_types import (
    EDITABLE_FIELDS,
    Industry,
    ProfileDraft,
    ResumeMode,
    ResumeSelection,
    UserRole,
)
from app.services.resume_acquisition import (
    LoggingResumeAuthoringHandoff,
    ResumeAuthoringHandoff,
    ResumeFile,
    submit_file,
)

logger = structlog.get_logger()

DEFAULT_PERSIST_TIMEOUT_SECONDS = 10.0

_MAX_FIELD_LENGTHS: dict[str, int] = {
    "name": 255,
    "phone": 50,
    "location": 255,
    "bio": 10000,
    "company": 255,
    "industry": 50,
}
"""Column bounds from the profiles table."""

_TIMEOUT_MSG = "Saving your profile timed out. Please try again."


@dataclass(frozen=True)
class CompletedProfilePayload:
    """Record sent to the profile store when onboarding completes.

    updated_at is not included; the store assigns it server-side.
    """

    user_id: uuid.UUID
    user_type: str
    name: str
    phone: str
    location: str
    bio: str
    company: str | None
    industry: str | None
    onboarding_completed: bool = True

    @classmethod
    def from_draft(
        cls, user_id: uuid.UUID, role: UserRole, draft: ProfileDraft
    ) -> "CompletedProfilePayload":
        employer = role is UserRole.EMPLOYER
        return cls(
            user_id=user_id,
            user_type=role.value,
            name=draft.name,
            phone=draft.phone,
            location=draft.location,
            bio=draft.bio,
            company=draft.company if employer else None,
            industry=draft.industry if employer else None,
        )


class ProfilePersistence(Protocol):
    """Profile store consumed by complete().

    Upserts the profile identified by payload.user_id. The returned record
    is ignored by the flow; any raised exception is a retryable failure.
    """

    async def save_completed_profile(self, payload: CompletedProfilePayload) -> object: ...


@dataclass(frozen=True)
class CompletionResult:
    """Outcome of a successful completion.

    Attributes:
        user_id: Owner of the flow.
        role: The flow's role.
        action: The terminal action that completed the flow.
        resume_mode: Resume choice carried at completion.
        handed_off_to_builder: True if the AI resume builder was engaged.
    """

    user_id: uuid.UUID
    role: UserRole
    action: OnboardingAction
    resume_mode: ResumeMode
    handed_off_to_builder: bool


class OnboardingController:
    """Runs one onboarding flow for one user.

    Args:
        user_id: Identity subject of the user being onboarded.
        role: The user's role (fixed for the flow).
        persistence: Profile store used once at completion.
        handoff: AI resume authoring collaborator.
        seed_name: Display name from identity metadata, prefilled on step 1.
        persist_timeout_seconds: Bound on the completion save.
    """

    def __init__(
        self,
        user_id: uuid.UUID,
        role: UserRole,
        persistence: ProfilePersistence,
        *,
        handoff: ResumeAuthoringHandoff | None = None,
        seed_name: str = "",
        persist_timeout_seconds: float = DEFAULT_PERSIST_TIMEOUT_SECONDS,
    ) -> None:
        self._user_id = user_id
        self._machine = OnboardingStateMachine(
            role, ProfileDraft(role=role, name=seed_name.strip())
        )
        self._persistence = persistence
        self._handoff = handoff or LoggingResumeAuthoringHandoff()
        self._timeout = persist_timeout_seconds
        self._in_flight = False
        self._abandoned = False
        self._result: CompletionResult | None = None

    @property
    def user_id(self) -> uuid.UUID:
        return self._user_id

    @property
    def machine(self) -> OnboardingStateMachine:
        return self._machine

    @property
    def is_completing(self) -> bool:
        """True while the completion save is in flight."""
        return self._in_flight

    @property
    def is_abandoned(self) -> bool:
        return self._abandoned

    @property
    def result(self) -> CompletionResult | None:
        return self._result

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def update_draft(self, **fields: str | None) -> ProfileDraft:
        """Set draft fields from user input.

        Values are whitespace-trimmed. Empty values are stored as empty
        strings and simply keep the step 1 guard closed.

        Returns:
            The updated draft.

        Raises:
            ValidationError: On unknown fields or values exceeding bounds.
            OnboardingValidationError: If industry is not an allowed value.
            InvalidStateError: If the flow is no longer active.
            CompletionInProgressError: If a completion save is in flight.
        """
        self._ensure_open()
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(
                message=f"Unknown fields: {', '.join(sorted(unknown))}",
                details=[{"field": name, "error": "UNKNOWN_FIELD"} for name in sorted(unknown)],
            )

        cleaned: dict[str, str] = {}
        for name, value in fields.items():
            text = (value or "").strip()
            if len(text) > _MAX_FIELD_LENGTHS[name]:
                raise ValidationError(
                    message=f"{name} is too long.",
                    details=[{"field": name, "error": "TOO_LONG"}],
                )
            cleaned[name] = text

        industry = cleaned.get("industry")
        if industry and industry not in {item.value for item in Industry}:
            raise OnboardingValidationError(
                f"Unknown industry '{industry}'.", missing_fields=["industry"]
            )

        draft = self._machine.draft
        for name, text in cleaned.items():
            setattr(draft, name, text)
        return draft

    def submit_resume(self, file: ResumeFile) -> ResumeSelection:
        """Record an uploaded resume on the upload step.

        Raises:
            RejectedFileError: If the file is not a PDF; the previous
                selection is kept and the step does not change.
            InvalidStateError: If not on the resume upload step.
            CompletionInProgressError: If a completion save is in flight.
        """
        self._ensure_open()
        selection = submit_file(file)
        self._machine.set_resume(selection)
        logger.info(
            "onboarding_resume_selected",
            user_id=str(self._user_id),
            size_bytes=file.size_bytes,
        )
        return selection

    def choose_ai_path(self) -> Transition:
        """Defer the resume to AI authoring and move to the builder choice step.

        Raises:
            InvalidStateError: If not on the resume upload step.
            CompletionInProgressError: If a completion save is in flight.
        """
        self._ensure_open()
        return self._machine.advance(OnboardingAction.CREATE_WITH_AI)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    async def perform(self, action: OnboardingAction) -> Transition:
        """Apply a user action, completing the flow on terminal actions.

        Raises:
            OnboardingValidationError: If the action's guard fails.
            InvalidStateError: If the action is not available.
            CompletionInProgressError: If a completion save is in flight.
            PersistenceError: If the completion save fails.
        """
        self._ensure_open()
        if action in TERMINAL_ACTIONS:
            transition = self._check_terminal(action)
            await self._persist(transition)
            return transition
        return self._machine.advance(action)

    async def complete(
        self, action: OnboardingAction | None = None
    ) -> CompletionResult | None:
        """Persist the draft and finish the flow.

        Args:
            action: Terminal action to complete with. Defaults to the
                current step's terminal action.

        Returns:
            CompletionResult on success, or None if the flow was abandoned
            while the save was in flight.

        Raises:
            InvalidStateError: If the current step is not terminal-eligible
                or the flow is already complete or abandoned.
            CompletionInProgressError: If a completion save is in flight.
            PersistenceError: If the save fails or times out.
        """
        self._ensure_open()
        if action is None:
            action = self._default_terminal_action()
        transition = self._check_terminal(action)
        return await self._persist(transition)

    def abandon(self) -> None:
        """Discard the flow. Nothing is persisted; an in-flight save is ignored."""
        if self._abandoned:
            return
        self._abandoned = True
        logger.info(
            "onboarding_abandoned",
            user_id=str(self._user_id),
            step=self._machine.current_step.value,
            completion_in_flight=self._in_flight,
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._abandoned:
            raise InvalidStateError("Onboarding was abandoned.")
        if self._machine.is_completed:
            raise InvalidStateError("Onboarding is already complete.")
        # Draft, step and resume are frozen until the save resolves.
        if self._in_flight:
            raise CompletionInProgressError()

    def _default_terminal_action(self) -> OnboardingAction:
        step = self._machine.current_step
        for action in STEP_ACTIONS[step]:
            if action in TERMINAL_ACTIONS:
                return action
        raise InvalidStateError(f"Cannot complete onboarding from step '{step.value}'.")

    def _check_terminal(self, action: OnboardingAction) -> Transition:
        if action not in TERMINAL_ACTIONS:
            raise InvalidStateError(f"Action '{action.value}' does not complete onboarding.")
        return self._machine.advance(action)

    async def _persist(self, transition: Transition) -> CompletionResult | None:
        payload = CompletedProfilePayload.from_draft(
            self._user_id, self._machine.role, self._machine.draft.snapshot()
        )
        self._in_flight = True
        try:
            await asyncio.wait_for(
                self._persistence.save_completed_profile(payload),
                timeout=self._timeout,
            )
        except Exception as exc:
            if self._abandoned:
                logger.info(
                    "onboarding_completion_ignored",
                    user_id=str(self._user_id),
                    error_type=type(exc).__name__,
                )
                return None
            raise self._persistence_error(exc) from exc
        finally:
            self._in_flight = False

        if self._abandoned:
            logger.info("onboarding_completion_ignored", user_id=str(self._user_id))
            return None

        self._machine.mark_completed(transition.resume)
        handed_off = transition.action is OnboardingAction.CONTINUE_TO_BUILDER
        if handed_off:
            await self._begin_resume_authoring()

        self._result = CompletionResult(
            user_id=self._user_id,
            role=self._machine.role,
            action=transition.action,
            resume_mode=transition.resume.mode,
            handed_off_to_builder=handed_off,
        )
        logger.info(
            "onboarding_completed",
            user_id=str(self._user_id),
            role=self._machine.role.value,
            action=transition.action.value,
            resume_mode=transition.resume.mode.value,
        )
        return self._result

    def _persistence_error(self, exc: Exception) -> PersistenceError:
        if isinstance(exc, TimeoutError):
            logger.warning(
                "onboarding_persist_timeout",
                user_id=str(self._user_id),
                timeout_seconds=self._timeout,
            )
            return PersistenceError(_TIMEOUT_MSG)
        if isinstance(exc, APIError):
            logger.warning(
                "onboarding_persist_failed",
                user_id=str(self._user_id),
                error_code=exc.code,
            )
            return PersistenceError(exc.message)
        logger.warning(
            "onboarding_persist_failed",
            user_id=str(self._user_id),
            error=str(exc)[:200],
            error_type=type(exc).__name__,
        )
        return PersistenceError()

    async def _begin_resume_authoring(self) -> None:
        # The profile is already saved; a failed hand-off must not undo it.
        try:
            await self._handoff.begin_resume_authoring(
                self._user_id, self._machine.draft.snapshot()
            )
        except Exception:
            logger.exception("resume_authoring_handoff_failed", user_id=str(self._user_id))
