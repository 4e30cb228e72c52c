"""Message history of the currently selected conversation."""

from typing import Callable, Iterable, List, Optional, Tuple

from ..models import Message
from ..utils.logger import get_logger
from .conversation_store import ConversationStore

logger = get_logger(__name__)

MessageListener = Callable[["MessageStore"], None]


class MessageStore:
    """
    Messages scoped to the selected conversation.

    Content is replaced wholesale on each accepted fetch. A fetch result for
    any conversation other than the one selected at apply time is dropped.
    """

    def __init__(self, conversation_store: ConversationStore):
        self._conversation_store = conversation_store
        self._conversation_id: Optional[int] = conversation_store.selected_id
        self._messages: Tuple[Message, ...] = ()
        self._loaded = False
        self._listeners: List[MessageListener] = []

        conversation_store.subscribe_selection(self._on_selection_changed)

    @property
    def conversation_id(self) -> Optional[int]:
        return self._conversation_id

    @property
    def messages(self) -> Tuple[Message, ...]:
        return self._messages

    @property
    def loaded(self) -> bool:
        """Whether a fetch has been applied since the last selection change."""
        return self._loaded

    def reconcile(self, conversation_id: int, snapshot: Iterable[Message]) -> bool:
        """
        Replace the message list if ``conversation_id`` is still selected.

        Returns:
            True if applied, False if discarded as stale
        """
        selected = self._conversation_store.selected_id
        if selected is None or conversation_id != selected:
            logger.debug(
                f"Discarding messages for conversation {conversation_id} "
                f"(selected: {selected})"
            )
            return False

        self._conversation_id = selected
        self._messages = tuple(snapshot)
        self._loaded = True
        self._notify()
        return True

    def subscribe(self, listener: MessageListener) -> None:
        self._listeners.append(listener)

    def _on_selection_changed(self, store: ConversationStore) -> None:
        self._conversation_id = store.selected_id
        self._messages = ()
        self._loaded = False
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
