"""Factory for creating conversation repositories."""

from typing import Any

from .base import ConversationRepository


def create_conversation_repository(
    backend: str = "http",
    **config: Any
) -> ConversationRepository:
    """Create a conversation repository.

    Args:
        backend: Backend type ("http" or "memory")
        **config: Backend-specific configuration
            For http:
                - base_url: str (required)
                - timeout: float (default: 30.0)
                - session_cookie: str | None
                - cookie_name: str
                - headers: dict[str, str] | None
            For memory:
                - responder: callable producing the reply text
                - clock: callable returning the current datetime

    Returns:
        ConversationRepository instance

    Raises:
        ValueError: If backend type is not supported
        TypeError: If required configuration is missing

    Example:
        >>> repository = create_conversation_repository(
        ...     "http",
        ...     base_url="http://localhost:3000/api",
        ...     session_cookie="..."
        ... )
    """
    backend_lower = backend.lower()

    if backend_lower == "http":
        if "base_url" not in config:
            raise TypeError("HTTP repository requires 'base_url' in config")
        from .http import HttpConversationRepository
        return HttpConversationRepository(**config)

    if backend_lower == "memory":
        from .in_memory import InMemoryConversationRepository
        return InMemoryConversationRepository(**config)

    raise ValueError(
        f"Unsupported repository backend: {backend}. "
        f"Supported backends: http, memory"
    )
