"""Local snapshot of conversations and the operator's selection."""

from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..models import Conversation
from ..utils.logger import get_logger

logger = get_logger(__name__)

StoreListener = Callable[["ConversationStore"], None]


class ConversationStore:
    """
    Holds the latest conversation snapshot and the selected conversation id.

    The selection is kept by id and re-resolved against every new snapshot,
    so it never points at stale data from an older poll.
    """

    def __init__(self):
        self._conversations: Tuple[Conversation, ...] = ()
        self._index: Dict[int, Conversation] = {}
        self._selected_id: Optional[int] = None
        self._listeners: List[StoreListener] = []
        self._selection_listeners: List[StoreListener] = []

    # === Read access ===

    @property
    def conversations(self) -> Tuple[Conversation, ...]:
        return self._conversations

    @property
    def selected_id(self) -> Optional[int]:
        return self._selected_id

    @property
    def selection(self) -> Optional[Conversation]:
        if self._selected_id is None:
            return None
        return self._index.get(self._selected_id)

    def get(self, conversation_id: int) -> Optional[Conversation]:
        return self._index.get(conversation_id)

    def __len__(self) -> int:
        return len(self._conversations)

    # === Mutations ===

    def reconcile(self, snapshot: Iterable[Conversation]) -> None:
        """
        Replace the stored list with a fresh snapshot.

        The selection survives when its id is still present; otherwise it is
        cleared and selection listeners are told about it.
        """
        self._set_snapshot(tuple(snapshot))

        previous = self._selected_id
        if previous is not None and previous not in self._index:
            logger.info(f"Selected conversation {previous} is gone from the latest snapshot")
            self._selected_id = None

        self._notify(selection_changed=previous != self._selected_id)

    def select(self, conversation_id: int) -> bool:
        """
        Select a conversation by id.

        Returns:
            True if the id exists in the current snapshot, False otherwise
            (the selection is left untouched)
        """
        if conversation_id not in self._index:
            return False

        changed = conversation_id != self._selected_id
        self._selected_id = conversation_id
        self._notify(selection_changed=changed)
        return True

    def clear_selection(self) -> None:
        if self._selected_id is None:
            return
        self._selected_id = None
        self._notify(selection_changed=True)

    def apply_local_toggle(self, conversation_id: int, new_state: bool) -> bool:
        """
        Patch ``is_bot_active`` on the local copy until the next poll confirms it.

        Returns:
            True if the conversation was found and patched
        """
        current = self._index.get(conversation_id)
        if current is None:
            return False

        patched = current.with_bot_active(new_state)
        self._set_snapshot(tuple(
            patched if c.id == conversation_id else c
            for c in self._conversations
        ))
        self._notify(selection_changed=False)
        return True

    # === Observers ===

    def subscribe(self, listener: StoreListener) -> None:
        """Register a callback fired after every mutation."""
        self._listeners.append(listener)

    def subscribe_selection(self, listener: StoreListener) -> None:
        """Register a callback fired when the selected id changes."""
        self._selection_listeners.append(listener)

    def _set_snapshot(self, conversations: Tuple[Conversation, ...]) -> None:
        self._conversations = conversations
        self._index = {c.id: c for c in conversations}

    def _notify(self, selection_changed: bool) -> None:
        # Selection listeners run first so dependent stores are re-scoped
        # before anything renders
        if selection_changed:
            for listener in list(self._selection_listeners):
                listener(self)
        for listener in list(self._listeners):
            listener(self)
