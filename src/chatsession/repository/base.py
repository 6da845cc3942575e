"""Abstract base class for conversation repositories.

This module defines the interface to the conversation persistence API.
The abstraction hides:
- Transport (HTTP, in-process)
- Authentication of requests
- Wire format conversion
"""

from abc import ABC, abstractmethod
from typing import Any

from ..models import ChatReply, Conversation, Message


class ConversationRepository(ABC):
    """Abstract conversation repository.

    Every operation either returns typed data or raises
    :class:`~chatsession.repository.errors.NetworkError` or
    :class:`~chatsession.repository.errors.ServerError`. Nothing is
    retried; each failure is surfaced once.

    Supports async context manager protocol for proper resource cleanup:
        async with repository:
            conversations = await repository.list_conversations()
    """

    @abstractmethod
    async def list_conversations(self) -> list[Conversation]:
        """List conversations, most recently active first."""

    @abstractmethod
    async def create_conversation(self, title: str | None = None) -> Conversation:
        """Create a conversation.

        Args:
            title: Optional title; the backend picks a default when omitted

        Returns:
            The new conversation, with an empty-state description
        """

    @abstractmethod
    async def list_messages(self, conversation_id: str) -> list[Message]:
        """List the messages of a conversation in chronological order."""

    @abstractmethod
    async def send_message(self, conversation_id: str, content: str) -> ChatReply:
        """Send a user message and return the assistant reply.

        The backend persists both the user message and the reply before
        answering.

        Args:
            conversation_id: Conversation the message belongs to
            content: Text of the user message

        Returns:
            The assistant reply
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def __aenter__(self) -> "ConversationRepository":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup."""
        await self.close()
