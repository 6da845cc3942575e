"""HTTP conversation repository built on httpx."""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from ..config import DEFAULT_TIMEOUT, SESSION_COOKIE_NAME
from ..models import ChatReply, Conversation, Message
from .base import ConversationRepository
from .errors import NetworkError, ServerError

logger = logging.getLogger(__name__)

_CONVERSATIONS = TypeAdapter(list[Conversation])
_MESSAGES = TypeAdapter(list[Message])


class HttpConversationRepository(ConversationRepository):
    """Talks to the conversation API over HTTP.

    Endpoints (relative to ``base_url``):
        GET  /conversations                 list conversations
        POST /conversations                 create a conversation
        GET  /conversations/{id}/messages   list messages
        POST /chat                          send a message

    Requests are authenticated with a session cookie managed outside
    this client. A 401/403 is reported like any other ServerError.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session_cookie: str | None = None,
        cookie_name: str = SESSION_COOKIE_NAME,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        cookies = {cookie_name: session_cookie} if session_cookie else None
        self._base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            cookies=cookies,
            headers={"Accept": "application/json", **(headers or {})},
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        """Perform a request and decode the JSON body.

        Raises:
            NetworkError: On transport failures, including timeouts
            ServerError: On non-success status or an undecodable body
        """
        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TransportError as e:
            raise NetworkError(f"{method} {path} failed: {e}") from e

        if not response.is_success:
            raise self._error_from_response(response)

        try:
            return response.json()
        except ValueError as e:
            raise ServerError(
                "Invalid JSON in response",
                status_code=response.status_code
            ) from e

    @staticmethod
    def _error_from_response(response: httpx.Response) -> ServerError:
        message = "Request failed"
        details = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("error") or message
            details = body.get("details")
        return ServerError(message, status_code=response.status_code, details=details)

    @staticmethod
    def _validate(adapter_or_model: Any, data: Any) -> Any:
        try:
            if isinstance(adapter_or_model, TypeAdapter):
                return adapter_or_model.validate_python(data)
            return adapter_or_model.model_validate(data)
        except ValidationError as e:
            raise ServerError("Unexpected response format", details=str(e)) from e

    async def list_conversations(self) -> list[Conversation]:
        data = await self._request("GET", "/conversations")
        return self._validate(_CONVERSATIONS, data)

    async def create_conversation(self, title: str | None = None) -> Conversation:
        body = {"title": title} if title else {}
        data = await self._request("POST", "/conversations", json=body)
        return self._validate(Conversation, data)

    async def list_messages(self, conversation_id: str) -> list[Message]:
        path = f"/conversations/{quote(conversation_id, safe='')}/messages"
        data = await self._request("GET", path)
        return self._validate(_MESSAGES, data)

    async def send_message(self, conversation_id: str, content: str) -> ChatReply:
        data = await self._request(
            "POST",
            "/chat",
            json={"conversationId": conversation_id, "message": content},
        )
        return self._validate(ChatReply, data)

    async def close(self) -> None:
        await self._client.aclose()

    @property
    def backend_type(self) -> str:
        return "http"
