"""File-backed session storage.

Each session scope gets its own JSON file under a state directory, so
values survive a restart of the process but a new session id starts
from an empty scope.
"""

import json
import os
import re
from pathlib import Path

from .base import SessionStorage

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


def default_session_id() -> str:
    """Identify the current terminal session.

    Uses the POSIX session id, which is shared by every process started
    from the same shell. Falls back to the parent process id elsewhere.
    """
    getsid = getattr(os, "getsid", None)
    if getsid is not None:
        return f"sid-{getsid(0)}"
    return f"ppid-{os.getppid()}"


class FileSessionStorage(SessionStorage):
    """JSON file storage for a single session scope."""

    def __init__(
        self,
        directory: str | Path = "~/.chatsession/sessions",
        session_id: str | None = None
    ):
        self._directory = Path(directory).expanduser()
        self._session_id = session_id or default_session_id()
        safe_name = _UNSAFE_CHARS.sub("_", self._session_id)
        self._path = self._directory / f"{safe_name}.json"

    @property
    def path(self) -> Path:
        """Location of the backing file."""
        return self._path

    @property
    def session_id(self) -> str:
        return self._session_id

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            # A corrupt scope is treated as empty and overwritten on next write
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, items: dict[str, str]) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps(items, indent=2), encoding="utf-8")
        tmp_path.replace(self._path)

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if key in items:
            del items[key]
            self._write(items)

    def clear(self) -> None:
        if self._path.exists():
            self._path.unlink()

    @property
    def backend_type(self) -> str:
        return "file"
