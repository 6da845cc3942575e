"""Session-scoped persistence for the current conversation pointer.

Module structure:
- base.py: Storage primitive interface (get/set/remove of string values)
- in_memory.py: Process-lifetime storage
- file.py: JSON file storage scoped to a session id
- adapter.py: The pointer wrapper used by the session store
- factory.py: Backend selection
"""

from .adapter import PersistenceAdapter
from .base import SessionStorage
from .factory import create_session_storage
from .file import FileSessionStorage
from .in_memory import InMemorySessionStorage

__all__ = [
    "FileSessionStorage",
    "InMemorySessionStorage",
    "PersistenceAdapter",
    "SessionStorage",
    "create_session_storage",
]
