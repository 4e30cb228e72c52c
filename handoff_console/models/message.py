"""Message API models."""

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class SenderType(str, Enum):
    """Who authored a message."""

    USER = "user"
    ADMIN = "admin"
    BOT = "bot"


class Message(BaseModel):
    """A single message inside a conversation."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(description="Message ID")
    conversation_id: int = Field(description="Conversation this message belongs to")
    sender_type: SenderType = Field(description="Message author: user, admin or bot")
    message_text: str = Field(default="", description="Message body")
    created_at: datetime = Field(description="Creation timestamp")

    @property
    def text(self) -> str:
        return self.message_text
