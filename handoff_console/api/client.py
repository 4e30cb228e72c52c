"""Async client for the handoff platform REST API."""

from typing import Any, List, Optional, Type

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from ..models import (
    Conversation,
    Message,
    KnowledgeBase,
    SendMessageRequest,
    UpdateKnowledgeBaseRequest,
)
from ..utils.logger import get_logger
from .errors import DecodeError, HttpError, NetworkError

logger = get_logger(__name__)

# Longest slice of an error body kept on HttpError
ERROR_DETAIL_LIMIT = 200

_conversation_list = TypeAdapter(List[Conversation])
_message_list = TypeAdapter(List[Message])


class RemoteClient:
    """
    Typed wrapper around the remote API.

    Every call either returns its decoded value or raises one of
    NetworkError, HttpError or DecodeError. No retries happen here.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root, e.g. http://localhost:8080
            timeout: Per-request timeout in seconds, None for no timeout
            transport: Optional transport (tests pass an ASGITransport)
            http_client: Pre-built client; takes precedence over the other options
        """
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "RemoteClient":
        """Build a client from console settings."""
        return cls(
            base_url=settings.get_api_base_url(),
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "RemoteClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()

    # === Conversations ===

    async def list_conversations(self) -> List[Conversation]:
        response = await self._request("GET", "/api/conversations")
        return self._decode_list(response, _conversation_list)

    async def list_messages(self, conversation_id: int) -> List[Message]:
        response = await self._request("GET", f"/api/conversations/{conversation_id}/messages")
        return self._decode_list(response, _message_list)

    async def send_message(self, conversation_id: int, text: str) -> None:
        body = SendMessageRequest(message=text)
        await self._request(
            "POST",
            f"/api/conversations/{conversation_id}/send",
            json=body.model_dump(),
        )

    async def set_bot_active(self, conversation_id: int, active: bool) -> None:
        """Hand the conversation to the bot (active=True) or take it over (active=False)."""
        action = "activate-bot" if active else "takeover"
        await self._request("POST", f"/api/conversations/{conversation_id}/{action}")

    # === Knowledge base ===

    async def get_knowledge_base(self) -> str:
        response = await self._request("GET", "/api/knowledge-base")
        return self._decode_model(response, KnowledgeBase).content

    async def set_knowledge_base(self, content: str) -> None:
        body = UpdateKnowledgeBaseRequest(content=content)
        await self._request("PUT", "/api/knowledge-base", json=body.model_dump())

    # === Internals ===

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.DecodingError as e:
            logger.debug(f"{method} {path} returned an undecodable body: {e!r}")
            raise DecodeError(f"{method} {path}: {e}") from e
        except httpx.RequestError as e:
            # Transport failures and redirect loops
            logger.debug(f"{method} {path} failed: {e!r}")
            raise NetworkError(f"{method} {path}: {e}") from e

        if not response.is_success:
            detail = response.text.strip()[:ERROR_DETAIL_LIMIT] or None
            raise HttpError(response.status_code, detail)

        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Invalid JSON from {response.request.url.path}: {e}") from e

    def _decode_list(self, response: httpx.Response, adapter: TypeAdapter) -> list:
        data = self._json(response)
        # Empty collections are encoded as null by the server
        if data is None:
            return []
        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            raise DecodeError(f"Unexpected payload from {response.request.url.path}: {e}") from e

    def _decode_model(self, response: httpx.Response, model: Type[BaseModel]) -> Any:
        data = self._json(response)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"Unexpected payload from {response.request.url.path}: {e}") from e
