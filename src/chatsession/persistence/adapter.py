"""Durable pointer to the conversation currently on display."""

import logging

from ..config import SESSION_POINTER_KEY
from .base import SessionStorage

logger = logging.getLogger(__name__)


class PersistenceAdapter:
    """Keeps the current conversation id in session storage.

    The stored value is read once at construction and exposed as
    ``initial_conversation_id`` for rehydrating the store. Without a
    storage backend every operation is a no-op. Storage I/O errors are
    logged and absorbed so that a broken state directory never breaks
    the chat itself.
    """

    def __init__(
        self,
        storage: SessionStorage | None = None,
        key: str = SESSION_POINTER_KEY
    ) -> None:
        self._storage = storage
        self._key = key
        self.initial_conversation_id = self.get()

    @property
    def key(self) -> str:
        return self._key

    @property
    def enabled(self) -> bool:
        """Whether a storage backend is attached."""
        return self._storage is not None

    def get(self) -> str | None:
        """Read the stored conversation id."""
        if self._storage is None:
            return None
        try:
            return self._storage.get_item(self._key)
        except OSError:
            logger.warning("Could not read session pointer", exc_info=True)
            return None

    def set(self, conversation_id: str) -> None:
        """Store the conversation id."""
        if self._storage is None:
            return
        try:
            self._storage.set_item(self._key, conversation_id)
        except OSError:
            logger.warning("Could not write session pointer", exc_info=True)

    def unset(self) -> None:
        """Remove the stored conversation id."""
        if self._storage is None:
            return
        try:
            self._storage.remove_item(self._key)
        except OSError:
            logger.warning("Could not remove session pointer", exc_info=True)
