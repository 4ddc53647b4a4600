"""Career assistant chat for job seekers.

Answers one question at a time with the caller's profile as context.
The assistant never fails the request: provider errors turn into an
apology reply that the client renders like any other answer.
"""

from dataclasses import dataclass

import structlog

from app.models.profile import Profile
from app.providers import ProviderError, factory
from app.providers.llm.base import LLMMessage, TaskType

logger = structlog.get_logger()

FALLBACK_REPLY = (
    "I apologize, but I'm having trouble processing your request right now. "
    "Please try again in a moment."
)

_SYSTEM_PROMPT = """You are an AI Career Assistant helping users with job search, career guidance, and professional development.

Based on the user's profile information, provide personalized career advice.

Guidelines:
- Be helpful, encouraging, and professional
- Provide specific, actionable advice
- Consider their current experience level and skills
- Suggest relevant upskilling opportunities
- Help with job search strategies
- Provide career path recommendations
- Keep responses concise but comprehensive
- Use a friendly, conversational tone"""


@dataclass(frozen=True)
class AssistantReply:
    """A single assistant answer.

    Attributes:
        content: Reply text.
        fallback: True if the provider failed and the apology was returned.
    """

    content: str
    fallback: bool = False


def build_profile_context(profile: Profile | None) -> str:
    """Render the profile fields the assistant may use."""
    context = "User Profile Context:\n"
    if profile is None:
        return context + "No profile information available.\n"
    if profile.name:
        context += f"Name: {profile.name}\n"
    if profile.location:
        context += f"Location: {profile.location}\n"
    if profile.bio:
        context += f"Bio: {profile.bio}\n"
    return context


async def ask_career_assistant(message: str, profile: Profile | None) -> AssistantReply:
    """Answer a career question.

    Args:
        message: The user's question.
        profile: The caller's profile, if one exists.

    Returns:
        AssistantReply; fallback=True when the provider failed.
    """
    llm = factory.get_llm_provider()
    prompt = (
        f"{build_profile_context(profile)}\n"
        f"User Question: {message}\n\n"
        "Provide a helpful response based on their profile and career goals."
    )

    try:
        response = await llm.complete(
            messages=[
                LLMMessage(role="system", content=_SYSTEM_PROMPT),
                LLMMessage(role="user", content=prompt),
            ],
            task=TaskType.CAREER_ASSISTANT,
        )
    except ProviderError as e:
        logger.warning("career_assistant_failed", error=str(e), error_type=type(e).__name__)
        return AssistantReply(content=FALLBACK_REPLY, fallback=True)

    if not response.content:
        logger.warning("career_assistant_empty_reply", finish_reason=response.finish_reason)
        return AssistantReply(content=FALLBACK_REPLY, fallback=True)

    return AssistantReply(content=response.content.strip())
