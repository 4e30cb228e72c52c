"""Presentation layer."""

from .render import (
    render_console,
    render_conversation_list,
    render_chat,
    render_message,
    bot_status_label,
    toggle_button_label,
)
from .console import ConsoleRenderer

__all__ = [
    "render_console",
    "render_conversation_list",
    "render_chat",
    "render_message",
    "bot_status_label",
    "toggle_button_label",
    "ConsoleRenderer",
]
