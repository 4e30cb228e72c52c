"""Refresh operations shared by the poller and the action dispatcher."""

from ..api import RemoteClient, RemoteError
from ..utils.logger import get_logger
from .conversation_store import ConversationStore
from .message_store import MessageStore

logger = get_logger(__name__)


class Synchronizer:
    """Fetches remote state and feeds it into the stores. Never raises RemoteError."""

    def __init__(
        self,
        client: RemoteClient,
        conversation_store: ConversationStore,
        message_store: MessageStore,
    ):
        self.client = client
        self.conversation_store = conversation_store
        self.message_store = message_store

    async def refresh_conversations(self) -> bool:
        """
        Replace the conversation snapshot with the remote list.

        Returns:
            True if the snapshot was applied, False on a remote failure
        """
        try:
            conversations = await self.client.list_conversations()
        except RemoteError as e:
            logger.warning(f"Error loading conversations: {e}")
            return False

        self.conversation_store.reconcile(conversations)
        return True

    async def refresh_messages(self, conversation_id: int) -> bool:
        """
        Fetch messages for a conversation and hand them to the message store.

        Returns:
            True if the messages were applied, False on failure or when the
            response arrived after the operator moved to another conversation
        """
        try:
            messages = await self.client.list_messages(conversation_id)
        except RemoteError as e:
            logger.warning(f"Error loading messages for conversation {conversation_id}: {e}")
            return False

        return self.message_store.reconcile(conversation_id, messages)

    async def refresh_selection(self) -> bool:
        """Refresh messages of whatever conversation is selected right now."""
        selected = self.conversation_store.selected_id
        if selected is None:
            return False
        return await self.refresh_messages(selected)
