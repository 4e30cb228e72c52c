"""Services package."""

from .conversation_store import ConversationStore
from .message_store import MessageStore
from .sync import Synchronizer
from .poller import Poller, PollerState
from .dispatcher import ActionDispatcher
from .ui_state import ConsoleUiState, Notification, NotificationLevel

__all__ = [
    "ConversationStore",
    "MessageStore",
    "Synchronizer",
    "Poller",
    "PollerState",
    "ActionDispatcher",
    "ConsoleUiState",
    "Notification",
    "NotificationLevel",
]
