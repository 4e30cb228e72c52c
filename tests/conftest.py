"""Pytest fixtures: an in-memory fake of the handoff API served through ASGITransport."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

import pytest
from fastapi import Body, FastAPI, HTTPException
from httpx import ASGITransport

from handoff_console.api import RemoteClient
from handoff_console.models import Conversation, Message
from handoff_console.services import (
    ActionDispatcher,
    ConsoleUiState,
    ConversationStore,
    MessageStore,
    Synchronizer,
)


BASE_TIME = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def conversation_payload(conv_id: int, **overrides) -> Dict[str, Any]:
    """Conversation JSON as the server encodes it."""
    data = {
        "id": conv_id,
        "telegram_chat_id": 1000 + conv_id,
        "telegram_username": f"user{conv_id}",
        "telegram_first_name": f"Name{conv_id}",
        "is_bot_active": True,
        "created_at": BASE_TIME.isoformat(),
        "updated_at": BASE_TIME.isoformat(),
        "last_message": f"hello from {conv_id}",
        "last_message_time": (BASE_TIME + timedelta(minutes=conv_id)).isoformat(),
    }
    data.update(overrides)
    return data


def message_payload(msg_id: int, conv_id: int, sender: str = "user", text: Optional[str] = None) -> Dict[str, Any]:
    """Message JSON as the server encodes it."""
    return {
        "id": msg_id,
        "conversation_id": conv_id,
        "sender_type": sender,
        "message_text": text if text is not None else f"message {msg_id}",
        "created_at": (BASE_TIME + timedelta(seconds=msg_id)).isoformat(),
    }


class FakeHandoffApi:
    """
    In-memory handoff API.

    Failures are injected per endpoint name with ``fail(name, status)``;
    ``hold(name)`` makes an endpoint wait until ``release(name)``. Names can
    be scoped to one conversation as ``"list_messages:2"``.
    """

    def __init__(self):
        self.conversations: Dict[int, Dict[str, Any]] = {}
        self.messages: Dict[int, List[Dict[str, Any]]] = {}
        self.knowledge_base = ""
        self.calls: List[Tuple[str, Any]] = []
        self._failures: Dict[str, int] = {}
        self._gates: Dict[str, asyncio.Event] = {}
        self._next_message_id = 1000
        self.app = self._build_app()

    # === Test helpers ===

    def add_conversation(self, conv_id: int, **overrides) -> Dict[str, Any]:
        self.conversations[conv_id] = conversation_payload(conv_id, **overrides)
        self.messages.setdefault(conv_id, [])
        return self.conversations[conv_id]

    def add_message(self, conv_id: int, sender: str = "user", text: Optional[str] = None) -> Dict[str, Any]:
        self._next_message_id += 1
        msg = message_payload(self._next_message_id, conv_id, sender, text)
        self.messages.setdefault(conv_id, []).append(msg)
        return msg

    def remove_conversation(self, conv_id: int) -> None:
        self.conversations.pop(conv_id, None)
        self.messages.pop(conv_id, None)

    def fail(self, name: str, status: int = 500) -> None:
        self._failures[name] = status

    def recover(self, name: str) -> None:
        self._failures.pop(name, None)

    def hold(self, name: str) -> None:
        self._gates[name] = asyncio.Event()

    def release(self, name: str) -> None:
        gate = self._gates.pop(name, None)
        if gate is not None:
            gate.set()

    def calls_to(self, name: str) -> List[Any]:
        return [arg for call, arg in self.calls if call == name]

    async def _enter(self, name: str, key: Any = None) -> None:
        self.calls.append((name, key))
        scoped = f"{name}:{key}"
        gate = self._gates.get(scoped) or self._gates.get(name)
        if gate is not None:
            await gate.wait()
        status = self._failures.get(scoped) or self._failures.get(name)
        if status is not None:
            raise HTTPException(status_code=status, detail=f"{name} failed")

    def _require(self, conv_id: int) -> Dict[str, Any]:
        if conv_id not in self.conversations:
            raise HTTPException(status_code=404, detail="Conversation not found")
        return self.conversations[conv_id]

    # === ASGI app ===

    def _build_app(self) -> FastAPI:
        app = FastAPI(title="Fake Handoff API")

        # Empty lists come back as null, like the real server
        @app.get("/api/conversations")
        async def list_conversations():
            await self._enter("list_conversations")
            return list(self.conversations.values()) or None

        @app.get("/api/conversations/{conv_id}/messages")
        async def list_messages(conv_id: int):
            await self._enter("list_messages", conv_id)
            return list(self.messages.get(conv_id, [])) or None

        @app.post("/api/conversations/{conv_id}/send")
        async def send(conv_id: int, payload: Dict[str, Any] = Body(...)):
            await self._enter("send", conv_id)
            conv = self._require(conv_id)
            text = payload.get("message", "")
            if not text:
                raise HTTPException(status_code=400, detail="Message cannot be empty")
            msg = self.add_message(conv_id, "admin", text)
            conv["last_message"] = text
            conv["last_message_time"] = msg["created_at"]
            return {"status": "success"}

        @app.post("/api/conversations/{conv_id}/activate-bot")
        async def activate_bot(conv_id: int):
            await self._enter("activate_bot", conv_id)
            self._require(conv_id)["is_bot_active"] = True
            return {"status": "success"}

        @app.post("/api/conversations/{conv_id}/takeover")
        async def takeover(conv_id: int):
            await self._enter("takeover", conv_id)
            self._require(conv_id)["is_bot_active"] = False
            return {"status": "success"}

        @app.get("/api/knowledge-base")
        async def get_knowledge_base():
            await self._enter("get_kb")
            return {"content": self.knowledge_base}

        @app.put("/api/knowledge-base")
        async def put_knowledge_base(payload: Dict[str, Any] = Body(...)):
            await self._enter("put_kb", payload.get("content"))
            self.knowledge_base = payload.get("content", "")
            return {"status": "success"}

        return app


@pytest.fixture
def fake_api() -> FakeHandoffApi:
    return FakeHandoffApi()


@pytest.fixture
async def remote_client(fake_api):
    """RemoteClient talking to the fake API in-process."""
    transport = ASGITransport(app=fake_api.app)
    async with RemoteClient("http://test", transport=transport) as client:
        yield client


@pytest.fixture
def conversation_store() -> ConversationStore:
    return ConversationStore()


@pytest.fixture
def message_store(conversation_store) -> MessageStore:
    return MessageStore(conversation_store)


@pytest.fixture
def ui_state() -> ConsoleUiState:
    return ConsoleUiState(max_notifications=5)


@pytest.fixture
def synchronizer(remote_client, conversation_store, message_store) -> Synchronizer:
    return Synchronizer(remote_client, conversation_store, message_store)


@pytest.fixture
def dispatcher(remote_client, conversation_store, synchronizer, ui_state) -> ActionDispatcher:
    return ActionDispatcher(remote_client, conversation_store, synchronizer, ui_state)


@pytest.fixture
def make_conversation():
    """Factory for Conversation models."""
    def _make(conv_id: int, **overrides) -> Conversation:
        return Conversation.model_validate(conversation_payload(conv_id, **overrides))
    return _make


@pytest.fixture
def make_message():
    """Factory for Message models."""
    def _make(msg_id: int, conv_id: int, sender: str = "user", text: Optional[str] = None) -> Message:
        return Message.model_validate(message_payload(msg_id, conv_id, sender, text))
    return _make
