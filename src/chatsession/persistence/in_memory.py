"""In-memory session storage.

Values live for the lifetime of the process.
"""

from .base import SessionStorage


class InMemorySessionStorage(SessionStorage):
    """Dict-backed session storage (process lifetime only)."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    @property
    def backend_type(self) -> str:
        return "memory"
