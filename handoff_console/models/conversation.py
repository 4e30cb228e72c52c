"""Conversation API models."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


# Conversations without messages carry Go's zero time instead of a null
ZERO_TIME_YEAR = 1


class Conversation(BaseModel):
    """A single end-user chat thread as reported by the remote API."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(description="Conversation ID")
    telegram_chat_id: int = Field(default=0, description="Chat ID on the messaging platform")
    telegram_username: str = Field(default="", description="Platform username")
    telegram_first_name: str = Field(default="", description="Platform first name")
    is_bot_active: bool = Field(default=True, description="Whether the bot answers incoming messages")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")
    last_message: Optional[str] = Field(None, description="Text of the most recent message")
    last_message_time: Optional[datetime] = Field(None, description="Timestamp of the most recent message")

    @field_validator("telegram_username", "telegram_first_name", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("last_message_time", mode="after")
    @classmethod
    def _drop_zero_time(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.year == ZERO_TIME_YEAR:
            return None
        return value

    @property
    def display_name(self) -> str:
        return self.telegram_first_name or self.telegram_username or "User"

    @property
    def handle(self) -> str:
        if self.telegram_username:
            return f"@{self.telegram_username}"
        return f"ID: {self.telegram_chat_id}"

    @property
    def last_message_preview(self) -> Optional[str]:
        return self.last_message or None

    @property
    def last_activity_at(self) -> datetime:
        return self.last_message_time or self.created_at

    def with_bot_active(self, active: bool) -> "Conversation":
        """Return a copy with ``is_bot_active`` replaced."""
        return self.model_copy(update={"is_bot_active": active})
