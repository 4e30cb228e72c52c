"""Operator actions: send, toggle bot control, edit the knowledge base."""

from pathlib import Path
from typing import Optional

import aiofiles

from ..api import RemoteClient, RemoteError
from ..utils.logger import get_logger
from .conversation_store import ConversationStore
from .sync import Synchronizer
from .ui_state import ConsoleUiState

logger = get_logger(__name__)


class ActionDispatcher:
    """
    Executes user-initiated mutations against the remote API.

    Local state only changes after the server confirms an action. Every
    failure, remote or validation, becomes an error notification.
    """

    def __init__(
        self,
        client: RemoteClient,
        conversation_store: ConversationStore,
        synchronizer: Synchronizer,
        ui_state: ConsoleUiState,
    ):
        self.client = client
        self.conversation_store = conversation_store
        self.synchronizer = synchronizer
        self.ui = ui_state

    # === Navigation ===

    async def select_conversation(self, conversation_id: int) -> bool:
        """Open a conversation and load its messages right away."""
        if not self.conversation_store.select(conversation_id):
            self.ui.error(f"Conversation {conversation_id} not found")
            return False

        await self.synchronizer.refresh_messages(conversation_id)
        return True

    def close_conversation(self) -> None:
        self.conversation_store.clear_selection()

    def update_draft(self, text: str) -> None:
        self.ui.set_draft(text)

    # === Messages ===

    async def send(self, text: Optional[str] = None) -> bool:
        """
        Send a message to the selected conversation.

        Args:
            text: Message text; the composer draft is used when omitted

        Returns:
            True if the server accepted the message
        """
        conversation = self.conversation_store.selection
        if conversation is None:
            self.ui.error("No conversation selected")
            return False

        message = (self.ui.draft if text is None else text).strip()
        if not message:
            self.ui.error("Message cannot be empty")
            return False

        try:
            await self.client.send_message(conversation.id, message)
        except RemoteError as e:
            logger.error(f"Error sending message to conversation {conversation.id}: {e}")
            self.ui.error(f"Failed to send message: {e}")
            return False

        if text is None:
            self.ui.set_draft("")
        await self.synchronizer.refresh_messages(conversation.id)
        return True

    # === Bot control ===

    async def toggle_bot_control(self) -> bool:
        """
        Take over a bot-active conversation or hand an admin-controlled one back to the bot.

        Returns:
            True if the server confirmed the switch
        """
        conversation = self.conversation_store.selection
        if conversation is None:
            self.ui.error("No conversation selected")
            return False

        target_state = not conversation.is_bot_active
        try:
            await self.client.set_bot_active(conversation.id, target_state)
        except RemoteError as e:
            logger.error(f"Error toggling bot for conversation {conversation.id}: {e}")
            self.ui.error(f"Failed to toggle bot: {e}")
            return False

        self.conversation_store.apply_local_toggle(conversation.id, target_state)
        await self.synchronizer.refresh_conversations()
        return True

    # === Knowledge base ===

    async def open_knowledge_base(self) -> bool:
        """Load the knowledge base into the editor and open it."""
        try:
            content = await self.client.get_knowledge_base()
        except RemoteError as e:
            logger.error(f"Error loading knowledge base: {e}")
            self.ui.error(f"Error loading knowledge base: {e}")
            return False

        self.ui.open_editor(content)
        return True

    def close_knowledge_base(self) -> None:
        self.ui.close_editor()

    def edit_knowledge_base(self, content: str) -> None:
        self._fill_editor(content)

    async def save_knowledge_base(self, content: Optional[str] = None) -> bool:
        """
        Replace the remote knowledge base.

        Args:
            content: New text; the editor content is used when omitted

        Returns:
            True if saved. On failure the editor stays open with its content.
        """
        if content is not None:
            self._fill_editor(content)

        text = self.ui.editor.content.strip()
        if not text:
            self.ui.error("Knowledge base cannot be empty")
            return False

        try:
            await self.client.set_knowledge_base(text)
        except RemoteError as e:
            logger.error(f"Error updating knowledge base: {e}")
            self.ui.error(f"Failed to update knowledge base: {e}")
            return False

        self.ui.info("Knowledge base updated successfully")
        self.ui.close_editor()
        return True

    async def load_knowledge_base_file(self, path: str) -> bool:
        """Read a local text file into the editor, opening it if needed."""
        file_path = Path(path).expanduser()
        try:
            async with aiofiles.open(file_path, "r", encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            logger.error(f"Error reading knowledge base file {file_path}: {e}")
            self.ui.error(f"Cannot read {file_path}: {e.strerror or e}")
            return False

        self._fill_editor(content)
        return True

    async def export_knowledge_base_file(self, path: str) -> bool:
        """Write the editor content to a local file."""
        if not self.ui.editor.is_open:
            self.ui.error("Knowledge base editor is not open")
            return False

        file_path = Path(path).expanduser()
        try:
            async with aiofiles.open(file_path, "w", encoding="utf-8") as f:
                await f.write(self.ui.editor.content)
        except OSError as e:
            logger.error(f"Error writing knowledge base file {file_path}: {e}")
            self.ui.error(f"Cannot write {file_path}: {e.strerror or e}")
            return False

        self.ui.info(f"Knowledge base exported to {file_path}")
        return True

    def _fill_editor(self, content: str) -> None:
        if self.ui.editor.is_open:
            self.ui.set_editor_content(content)
        else:
            self.ui.open_editor(content)
