"""Operator console for a chat-bot handoff platform."""

__version__ = "1.0.0"
