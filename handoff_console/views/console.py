"""Re-render the console whenever a store changes."""

from typing import Callable, Optional

from ..services.conversation_store import ConversationStore
from ..services.message_store import MessageStore
from ..services.ui_state import ConsoleUiState
from .render import render_console

FrameWriter = Callable[[str], None]


class ConsoleRenderer:
    """Store listener that renders read-only snapshots and writes changed frames."""

    def __init__(
        self,
        conversation_store: ConversationStore,
        message_store: MessageStore,
        ui_state: ConsoleUiState,
        write: FrameWriter = print,
    ):
        self.conversation_store = conversation_store
        self.message_store = message_store
        self.ui_state = ui_state
        self._write = write
        self.last_frame: Optional[str] = None
        self.render_count = 0

    def attach(self) -> None:
        """Subscribe to every store so each mutation triggers a render."""
        self.conversation_store.subscribe(self._on_change)
        self.message_store.subscribe(self._on_change)
        self.ui_state.subscribe(self._on_change)

    def render(self) -> str:
        return render_console(
            conversations=self.conversation_store.conversations,
            selection=self.conversation_store.selection,
            messages=self.message_store.messages,
            notifications=self.ui_state.notifications,
            editor=self.ui_state.editor,
        )

    def refresh(self) -> bool:
        """
        Render and write the frame if it differs from the last one.

        Returns:
            True if a frame was written
        """
        self.render_count += 1
        frame = self.render()
        if frame == self.last_frame:
            return False

        self.last_frame = frame
        self._write(frame)
        return True

    def _on_change(self, _source) -> None:
        self.refresh()
