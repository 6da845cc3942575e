"""
chatsession: conversation session state for chat UIs.

Each module hides one design decision:
- messages: how chat messages are constructed
- persistence: where the current conversation pointer is kept
- repository: how the conversation API is reached
- store: how session state changes and who gets told about it
"""

__version__ = "0.1.0"

from .messages import MessageFactory
from .models import ChatReply, Conversation, Message
from .persistence import PersistenceAdapter, create_session_storage
from .repository import (
    ConversationRepository,
    NetworkError,
    RepositoryError,
    ServerError,
    create_conversation_repository,
)
from .store import SessionStore

__all__ = [
    "ChatReply",
    "Conversation",
    "ConversationRepository",
    "Message",
    "MessageFactory",
    "NetworkError",
    "PersistenceAdapter",
    "RepositoryError",
    "ServerError",
    "SessionStore",
    "create_conversation_repository",
    "create_session_storage",
]
