"""Operator-local UI state: composer draft, knowledge base editor, notifications."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Deque, List, Tuple


class NotificationLevel(str, Enum):
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A user-visible message produced by an action."""

    level: NotificationLevel
    text: str
    created_at: datetime = field(default_factory=datetime.now)


@dataclass
class KnowledgeBaseEditor:
    """Settings surface for editing the knowledge base."""

    is_open: bool = False
    content: str = ""


UiListener = Callable[["ConsoleUiState"], None]


class ConsoleUiState:
    """State that belongs to the operator's screen rather than the remote API."""

    def __init__(self, max_notifications: int = 20):
        self.draft: str = ""
        self.editor = KnowledgeBaseEditor()
        self._notifications: Deque[Notification] = deque(maxlen=max_notifications)
        self._listeners: List[UiListener] = []

    @property
    def notifications(self) -> Tuple[Notification, ...]:
        return tuple(self._notifications)

    @property
    def last_notification(self):
        return self._notifications[-1] if self._notifications else None

    def set_draft(self, text: str) -> None:
        self.draft = text
        self._notify()

    def open_editor(self, content: str) -> None:
        self.editor = KnowledgeBaseEditor(is_open=True, content=content)
        self._notify()

    def set_editor_content(self, content: str) -> None:
        self.editor.content = content
        self._notify()

    def close_editor(self) -> None:
        self.editor = KnowledgeBaseEditor()
        self._notify()

    def info(self, text: str) -> None:
        self._notifications.append(Notification(NotificationLevel.INFO, text))
        self._notify()

    def error(self, text: str) -> None:
        self._notifications.append(Notification(NotificationLevel.ERROR, text))
        self._notify()

    def clear_notifications(self) -> None:
        self._notifications.clear()
        self._notify()

    def subscribe(self, listener: UiListener) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
