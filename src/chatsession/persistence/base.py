"""Abstract base class for session storage primitives.

The abstraction hides:
- Where values live (memory, a file on disk)
- How a storage scope maps to a browsing or terminal session
"""

from abc import ABC, abstractmethod


class SessionStorage(ABC):
    """Key/value storage of strings scoped to one session."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store a value under a key."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove a key. Removing an absent key is not an error."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every key in this scope."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
