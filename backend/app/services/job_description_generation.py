"""Job description generation for employers.

Turns the fields an employer has filled in so far into a 3-4 paragraph
description. Provider failures are mapped to user-facing APIErrors; the
employer can always write the description by hand.
"""

import re

import structlog

from app.core.errors import APIError
from app.providers import (
    AuthenticationError,
    ProviderError,
    RateLimitError,
    TransientError,
    factory,
)
from app.providers.llm.base import LLMMessage, TaskType
from app.providers.retry import with_retries

logger = structlog.get_logger()

_SYSTEM_PROMPT = (
    "You are an experienced recruiter who writes clear, engaging job descriptions."
)

# Bold lead lines ("**About the role**") and markdown heading markers
_BOLD_LEAD_RE = re.compile(r"^\*\*.*?\*\*\s*", re.MULTILINE)
_HEADING_RE = re.compile(r"^#+\s*", re.MULTILINE)


class GenerationUnavailableError(APIError):
    """The description could not be generated (503)."""

    def __init__(self, message: str) -> None:
        super().__init__(
            code="GENERATION_UNAVAILABLE",
            message=message,
            status_code=503,
        )


def build_description_prompt(
    *,
    title: str,
    company: str,
    location: str | None = None,
    salary: str | None = None,
    requirements: list[str] | None = None,
) -> str:
    """Build the generation prompt from the posting form fields."""
    requirement_text = (
        ", ".join(requirements) if requirements else "Standard requirements for this role"
    )
    return f"""Generate a comprehensive and professional job description for the following position:

Job Title: {title}
Company: {company}
Location: {location or "Not specified"}
Salary Range: {salary or "Competitive"}
Requirements: {requirement_text}

Please create a detailed job description that includes:
1. A compelling overview of the role and company
2. Key responsibilities and duties
3. Required qualifications and skills
4. Preferred qualifications
5. Benefits and what makes this opportunity attractive
6. Company culture highlights

Make it professional, engaging, and tailored to attract top talent. The description should be 3-4 paragraphs long and highlight why candidates would want to work for this company."""


def clean_generated_description(text: str) -> str:
    """Strip markdown bold lead lines and heading markers."""
    text = _BOLD_LEAD_RE.sub("", text)
    text = _HEADING_RE.sub("", text)
    return text.strip()


async def generate_job_description(
    *,
    title: str,
    company: str,
    location: str | None = None,
    salary: str | None = None,
    requirements: list[str] | None = None,
) -> str:
    """Generate a job description with the configured LLM provider.

    Returns:
        Plain-text description.

    Raises:
        GenerationUnavailableError: If the provider fails or returns nothing.
    """
    llm = factory.get_llm_provider()
    messages = [
        LLMMessage(role="system", content=_SYSTEM_PROMPT),
        LLMMessage(
            role="user",
            content=build_description_prompt(
                title=title,
                company=company,
                location=location,
                salary=salary,
                requirements=requirements,
            ),
        ),
    ]

    try:
        response = await with_retries(
            lambda: llm.complete(messages=messages, task=TaskType.JOB_DESCRIPTION),
            llm.config,
        )
    except RateLimitError as e:
        logger.warning("job_description_rate_limited", error=str(e))
        raise GenerationUnavailableError(
            "The AI service quota is exhausted. Please try again later."
        ) from e
    except TransientError as e:
        logger.warning("job_description_unavailable", error=str(e))
        raise GenerationUnavailableError(
            "The AI service is currently busy. Please try again in a few moments."
        ) from e
    except AuthenticationError as e:
        logger.error("job_description_auth_failed", error=str(e))
        raise GenerationUnavailableError(
            "The AI service is not configured correctly."
        ) from e
    except ProviderError as e:
        logger.warning("job_description_failed", error=str(e))
        raise GenerationUnavailableError(
            "Failed to generate job description. Please try again."
        ) from e

    description = clean_generated_description(response.content or "")
    if not description:
        raise GenerationUnavailableError(
            "Failed to generate job description. Please try again."
        )

    logger.info("job_description_generated", model=response.model, length=len(description))
    return description
