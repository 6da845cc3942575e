"""Provider factory functions for CLI.

Centralizes creation of the repository, the session storage and the
store from environment variables. Hides configuration details from
command implementations.
"""

import os

from rich.console import Console

from ..config import (
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT,
    ENV_API_URL,
    ENV_BACKEND,
    ENV_SESSION_COOKIE,
    ENV_SESSION_ID,
    ENV_STATE_DIR,
    ENV_STORAGE,
    ENV_TIMEOUT,
)
from ..persistence import PersistenceAdapter, SessionStorage, create_session_storage
from ..repository import ConversationRepository, create_conversation_repository
from ..store import SessionStore

# Default console for output
_console = Console()


def get_repository(console: Console | None = None) -> ConversationRepository:
    """Create the conversation repository from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        Repository instance

    Raises:
        SystemExit: If the configuration is invalid

    Environment variables:
        CHATSESSION_BACKEND: http or memory (default: http)
        CHATSESSION_API_URL: API base URL (default: http://localhost:3000/api)
        CHATSESSION_TIMEOUT: Request timeout in seconds (default: 30)
        CHATSESSION_SESSION_COOKIE: Session credential sent with every request
    """
    import typer

    con = console or _console
    backend = os.getenv(ENV_BACKEND, "http").lower()

    if backend == "memory":
        return create_conversation_repository("memory")

    try:
        timeout = float(os.getenv(ENV_TIMEOUT, str(DEFAULT_TIMEOUT)))
    except ValueError:
        con.print(f"[red]Error: {ENV_TIMEOUT} must be a number[/red]")
        raise typer.Exit(code=1)

    try:
        return create_conversation_repository(
            backend,
            base_url=os.getenv(ENV_API_URL, DEFAULT_API_URL),
            timeout=timeout,
            session_cookie=os.getenv(ENV_SESSION_COOKIE),
        )
    except ValueError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


def get_storage(console: Console | None = None) -> SessionStorage | None:
    """Create session storage from environment variables.

    Environment variables:
        CHATSESSION_STORAGE: file, memory or none (default: file)
        CHATSESSION_STATE_DIR: Directory for file storage
        CHATSESSION_SESSION_ID: Session scope (default: the terminal session)
    """
    import typer

    con = console or _console
    backend = os.getenv(ENV_STORAGE, "file").lower()

    config: dict[str, str] = {}
    if backend == "file":
        if os.getenv(ENV_STATE_DIR):
            config["directory"] = os.environ[ENV_STATE_DIR]
        if os.getenv(ENV_SESSION_ID):
            config["session_id"] = os.environ[ENV_SESSION_ID]

    try:
        return create_session_storage(backend, **config)
    except ValueError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


def get_store(console: Console | None = None) -> SessionStore:
    """Create a session store wired to the configured backends."""
    repository = get_repository(console)
    persistence = PersistenceAdapter(get_storage(console))
    return SessionStore(repository, persistence)
