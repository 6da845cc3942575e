"""Conversation repository: access to the remote conversation API.

Module structure:
- base.py: The four remote operations every backend provides
- errors.py: Failure kinds surfaced to callers
- http.py: httpx client for the HTTP contract
- in_memory.py: In-process backend with the same semantics
- factory.py: Backend selection
"""

from .base import ConversationRepository
from .errors import NetworkError, RepositoryError, ServerError
from .factory import create_conversation_repository
from .http import HttpConversationRepository
from .in_memory import InMemoryConversationRepository, echo_responder

__all__ = [
    "ConversationRepository",
    "HttpConversationRepository",
    "InMemoryConversationRepository",
    "NetworkError",
    "RepositoryError",
    "ServerError",
    "create_conversation_repository",
    "echo_responder",
]
