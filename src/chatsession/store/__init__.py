"""Session store: the state container behind a chat UI."""

from .session_store import Listener, SessionStore

__all__ = ["Listener", "SessionStore"]
