"""Knowledge base API models."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class KnowledgeBase(BaseModel):
    """Shared text used to condition bot responses."""

    content: str = Field(default="", description="Knowledge base text")

    @field_validator("content", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Optional[str]) -> str:
        return "" if value is None else value


class UpdateKnowledgeBaseRequest(BaseModel):
    """Request body for replacing the knowledge base."""

    content: str = Field(description="New knowledge base text")


class SendMessageRequest(BaseModel):
    """Request body for sending an operator message."""

    message: str = Field(description="Message text")
