"""Pure text rendering of console state."""

from datetime import datetime
from typing import List, Optional, Sequence

from ..models import Conversation, Message, SenderType
from ..services.ui_state import KnowledgeBaseEditor, Notification, NotificationLevel
from ..utils.time_format import format_time

NO_CONVERSATIONS = "No conversations yet"
NO_MESSAGES = "No messages yet"
EMPTY_CHAT = "Select a conversation to start chatting"

SENDER_LABELS = {
    SenderType.ADMIN: "Admin",
    SenderType.BOT: "Bot",
}


def bot_status_label(conversation: Conversation) -> str:
    return "Bot Active" if conversation.is_bot_active else "Admin Mode"


def toggle_button_label(conversation: Conversation) -> str:
    """Label of the action the toggle will perform."""
    return "Take Over" if conversation.is_bot_active else "Activate Bot"


def render_conversation_list(
    conversations: Sequence[Conversation],
    selected_id: Optional[int],
    now: Optional[datetime] = None,
) -> List[str]:
    if not conversations:
        return [NO_CONVERSATIONS]

    lines = []
    for conv in conversations:
        marker = ">" if conv.id == selected_id else " "
        preview = conv.last_message_preview or NO_MESSAGES
        lines.append(
            f"{marker} [{conv.id}] {conv.display_name} ({bot_status_label(conv)})"
        )
        lines.append(f"      {preview} · {format_time(conv.last_activity_at, now)}")
    return lines


def render_message(message: Message, now: Optional[datetime] = None) -> str:
    label = SENDER_LABELS.get(message.sender_type)
    prefix = f"{label}: " if label else ""
    return f"{prefix}{message.text}  ({format_time(message.created_at, now)})"


def render_chat(
    selection: Optional[Conversation],
    messages: Sequence[Message],
    now: Optional[datetime] = None,
) -> List[str]:
    """Header plus message history of the open conversation, or the empty state."""
    if selection is None:
        return [EMPTY_CHAT]

    lines = [
        f"{selection.display_name} {selection.handle}  [{toggle_button_label(selection)}]",
    ]
    if not messages:
        lines.append(NO_MESSAGES)
    else:
        lines.extend(render_message(m, now) for m in messages)
    return lines


def render_notifications(notifications: Sequence[Notification]) -> List[str]:
    return [
        f"{'!' if n.level is NotificationLevel.ERROR else '*'} {n.text}"
        for n in notifications
    ]


def render_editor(editor: KnowledgeBaseEditor) -> List[str]:
    if not editor.is_open:
        return []
    return ["--- Knowledge base ---", *editor.content.splitlines(), "----------------------"]


def render_console(
    conversations: Sequence[Conversation],
    selection: Optional[Conversation],
    messages: Sequence[Message],
    notifications: Sequence[Notification] = (),
    editor: Optional[KnowledgeBaseEditor] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Render the full console frame.

    Args:
        conversations: Current conversation snapshot
        selection: Selected conversation resolved from the snapshot
        messages: Messages of the selected conversation
        notifications: Recent notifications, oldest first
        editor: Knowledge base editor state
        now: Reference time for relative timestamps

    Returns:
        Frame text
    """
    selected_id = selection.id if selection is not None else None
    sections = [
        ["== Conversations =="] + render_conversation_list(conversations, selected_id, now),
        ["== Chat =="] + render_chat(selection, messages, now),
    ]
    if editor is not None and editor.is_open:
        sections.append(render_editor(editor))
    if notifications:
        sections.append(render_notifications(notifications))

    return "\n\n".join("\n".join(section) for section in sections)
