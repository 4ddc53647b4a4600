"""Career assistant API router.

Endpoints:
- POST /assistant/messages  Ask the career assistant a question.
"""

from fastapi import APIRouter, Request

from app.api.deps import CurrentUserId, DbSession
from app.core.config import settings
from app.core.rate_limiting import limiter
from app.core.responses import DataResponse
from app.repositories.profile_repository import ProfileRepository
from app.schemas.assistant import AssistantMessageRequest, AssistantReplyResponse
from app.services.career_assistant import ask_career_assistant

router = APIRouter()


@router.post("/messages")
@limiter.limit(settings.rate_limit_llm)
async def send_assistant_message(
    request: Request,  # noqa: ARG001
    body: AssistantMessageRequest,
    user_id: CurrentUserId,
    db: DbSession,
) -> DataResponse[AssistantReplyResponse]:
    """Answer a career question using the caller's profile as context.

    AI service failures return a fallback reply rather than an error.
    """
    profile = await ProfileRepository.get_by_user_id(db, user_id)
    reply = await ask_career_assistant(body.message, profile)
    return DataResponse(
        data=AssistantReplyResponse(content=reply.content, fallback=reply.fallback)
    )
