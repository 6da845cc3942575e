"""In-memory conversation repository.

Keeps conversations and messages in dicts and reproduces the backend's
observable behavior: default titles, activity ordering, relative
timestamps and not-found errors. Reply generation is delegated to a
responder callable, since the LLM call belongs to the backend.
Data is lost when the process exits.
"""

import inspect
import itertools
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from ..config import DEFAULT_CONVERSATION_TITLE, EMPTY_CONVERSATION_DESCRIPTION
from ..formatting import format_relative_timestamp
from ..models import ChatReply, Conversation, Message
from .base import ConversationRepository
from .errors import NetworkError, ServerError

logger = logging.getLogger(__name__)

Responder = Callable[[list[Message]], Awaitable[str] | str]
Clock = Callable[[], datetime]


def echo_responder(history: list[Message]) -> str:
    """Reply by echoing the latest user message."""
    return f"You said: {history[-1].content}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class _StoredConversation:
    id: str
    title: str | None
    created_at: datetime
    updated_at: datetime
    activity: int
    messages: list[Message] = field(default_factory=list)


class InMemoryConversationRepository(ConversationRepository):
    """In-process conversation backend (session-only).

    Suitable for offline use and testing.
    """

    def __init__(
        self,
        responder: Responder | None = None,
        clock: Clock | None = None
    ):
        self._responder = responder or echo_responder
        self._clock = clock or _utcnow
        self._conversations: dict[str, _StoredConversation] = {}
        self._activity = itertools.count(1)
        self._closed = False

    def _ensure_open(self) -> None:
        if self._closed:
            raise NetworkError("Repository is closed")

    def _get(self, conversation_id: str) -> _StoredConversation:
        stored = self._conversations.get(conversation_id)
        if stored is None:
            raise ServerError("Conversation not found", status_code=404)
        return stored

    def _summarize(self, stored: _StoredConversation) -> Conversation:
        latest = stored.messages[-1].content if stored.messages else None
        return Conversation(
            id=stored.id,
            title=stored.title or DEFAULT_CONVERSATION_TITLE,
            description=latest or EMPTY_CONVERSATION_DESCRIPTION,
            timestamp=format_relative_timestamp(stored.updated_at, self._clock()),
        )

    def _touch(self, stored: _StoredConversation) -> None:
        stored.updated_at = self._clock()
        stored.activity = next(self._activity)

    async def list_conversations(self) -> list[Conversation]:
        self._ensure_open()
        ordered = sorted(
            self._conversations.values(),
            key=lambda c: c.activity,
            reverse=True
        )
        return [self._summarize(c) for c in ordered]

    async def create_conversation(self, title: str | None = None) -> Conversation:
        self._ensure_open()
        now = self._clock()
        stored = _StoredConversation(
            id=uuid4().hex,
            title=title or None,
            created_at=now,
            updated_at=now,
            activity=next(self._activity),
        )
        self._conversations[stored.id] = stored
        logger.debug("Created conversation %s", stored.id)
        return self._summarize(stored)

    async def list_messages(self, conversation_id: str) -> list[Message]:
        self._ensure_open()
        return list(self._get(conversation_id).messages)

    async def send_message(self, conversation_id: str, content: str) -> ChatReply:
        self._ensure_open()
        stored = self._get(conversation_id)
        if not content or not content.strip():
            raise ServerError("Message is required", status_code=400)

        stored.messages.append(Message(
            id=uuid4().hex,
            role="user",
            content=content,
            conversation_id=conversation_id,
            created_at=self._clock(),
        ))

        try:
            reply_text = self._responder(list(stored.messages))
            if inspect.isawaitable(reply_text):
                reply_text = await reply_text
        except Exception as e:
            logger.error("Responder failed for conversation %s", conversation_id, exc_info=True)
            raise ServerError(
                "Failed to generate response",
                status_code=500,
                details=str(e)
            ) from e

        reply = Message(
            id=uuid4().hex,
            role="assistant",
            content=reply_text,
            conversation_id=conversation_id,
            created_at=self._clock(),
        )
        stored.messages.append(reply)
        self._touch(stored)
        return ChatReply(id=reply.id, content=reply.content)

    async def close(self) -> None:
        self._closed = True

    @property
    def backend_type(self) -> str:
        return "memory"
