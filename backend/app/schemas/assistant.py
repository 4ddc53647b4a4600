"""Career assistant schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AssistantMessageRequest(BaseModel):
    """Request body for POST /assistant/messages.

    Attributes:
        message: The user's question.
    """

    model_config = ConfigDict(extra="forbid")

    message: str = Field(..., max_length=4000, description="User question")

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("message")
    @classmethod
    def message_not_empty(cls, v: str) -> str:
        """Validate message is not empty after stripping."""
        if not v:
            msg = "Message cannot be empty"
            raise ValueError(msg)
        return v


class AssistantReplyResponse(BaseModel):
    """The assistant's answer.

    Attributes:
        content: Reply text.
        fallback: True when the AI service failed and an apology was returned.
    """

    content: str
    fallback: bool = False
