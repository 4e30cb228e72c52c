"""Pydantic models for the remote API."""

from .conversation import Conversation
from .message import Message, SenderType
from .knowledge_base import KnowledgeBase, UpdateKnowledgeBaseRequest, SendMessageRequest

__all__ = [
    "Conversation",
    "Message",
    "SenderType",
    "KnowledgeBase",
    "UpdateKnowledgeBaseRequest",
    "SendMessageRequest",
]
