"""Message construction for chat sessions."""

from .factory import MessageFactory

__all__ = ["MessageFactory"]
