"""Factory for creating session storage backends."""

from typing import Any

from .base import SessionStorage


def create_session_storage(
    backend: str = "memory",
    **kwargs: Any
) -> SessionStorage | None:
    """Create a session storage backend.

    Args:
        backend: Backend type ("memory", "file" or "none")
        **kwargs: Backend-specific configuration
            For file:
                - directory: str | Path (default: ~/.chatsession/sessions)
                - session_id: str | None (default: the terminal session)

    Returns:
        SessionStorage instance, or None for "none" (persistence disabled)

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemorySessionStorage
        return InMemorySessionStorage(**kwargs)

    elif backend == "file":
        from .file import FileSessionStorage
        return FileSessionStorage(**kwargs)

    elif backend == "none":
        return None

    raise ValueError(
        f"Unsupported storage backend: {backend}. "
        f"Supported backends: memory, file, none"
    )
