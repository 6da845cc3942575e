"""Unit tests for the persistence module."""
import json
from unittest.mock import MagicMock

import pytest
from hypothesis import given
from hypothesis import strategies as st

from chatsession.persistence import (
    FileSessionStorage,
    InMemorySessionStorage,
    PersistenceAdapter,
    SessionStorage,
    create_session_storage,
)


class TestSessionStorageInterface:
    """Tests for the abstract SessionStorage interface."""

    def test_storage_is_abstract(self):
        """Test that SessionStorage cannot be instantiated directly."""
        with pytest.raises(TypeError):
            SessionStorage()  # type: ignore


class TestInMemorySessionStorage:
    """Tests for InMemorySessionStorage."""

    def test_set_get_remove(self):
        storage = InMemorySessionStorage()

        storage.set_item("key", "value")
        assert storage.get_item("key") == "value"

        storage.remove_item("key")
        assert storage.get_item("key") is None

    def test_remove_missing_key_is_noop(self):
        InMemorySessionStorage().remove_item("missing")

    def test_initial_values(self):
        storage = InMemorySessionStorage({"a": "1"})
        assert storage.get_item("a") == "1"
        assert storage.backend_type == "memory"


class TestFileSessionStorage:
    """Tests for FileSessionStorage."""

    def test_values_survive_new_instance(self, tmp_path):
        """Test that a second instance with the same scope sees the value."""
        FileSessionStorage(tmp_path, session_id="tab-1").set_item("k", "v")

        reloaded = FileSessionStorage(tmp_path, session_id="tab-1")
        assert reloaded.get_item("k") == "v"

    def test_new_session_starts_empty(self, tmp_path):
        """Test that another session id does not see the value."""
        FileSessionStorage(tmp_path, session_id="tab-1").set_item("k", "v")

        other = FileSessionStorage(tmp_path, session_id="tab-2")
        assert other.get_item("k") is None

    def test_remove_item(self, tmp_path):
        storage = FileSessionStorage(tmp_path, session_id="s")
        storage.set_item("k", "v")
        storage.set_item("other", "x")

        storage.remove_item("k")

        assert storage.get_item("k") is None
        assert json.loads(storage.path.read_text()) == {"other": "x"}

    def test_clear_deletes_file(self, tmp_path):
        storage = FileSessionStorage(tmp_path, session_id="s")
        storage.set_item("k", "v")

        storage.clear()

        assert not storage.path.exists()

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        storage = FileSessionStorage(tmp_path, session_id="s")
        storage.path.write_text("{not json")

        assert storage.get_item("k") is None

    def test_undecodable_file_reads_as_empty(self, tmp_path):
        storage = FileSessionStorage(tmp_path, session_id="s")
        storage.path.write_bytes(b"\xff\xfe{bad")

        assert storage.get_item("k") is None
        assert PersistenceAdapter(storage).initial_conversation_id is None

        storage.set_item("k", "v")
        assert storage.get_item("k") == "v"

    def test_session_id_is_sanitized(self, tmp_path):
        storage = FileSessionStorage(tmp_path, session_id="../escape me")

        assert storage.path.parent == tmp_path
        assert storage.session_id == "../escape me"

    def test_default_session_id(self, tmp_path):
        storage = FileSessionStorage(tmp_path)
        assert storage.session_id


class TestPersistenceAdapter:
    """Tests for PersistenceAdapter."""

    def test_set_writes_pointer_key(self, storage):
        adapter = PersistenceAdapter(storage)

        adapter.set("abc")

        assert storage.get_item("currentConversationId") == "abc"

    def test_unset_removes_pointer_key(self, storage):
        storage.set_item("currentConversationId", "abc")
        adapter = PersistenceAdapter(storage)

        adapter.unset()

        assert storage.get_item("currentConversationId") is None

    def test_reads_initial_value_once(self, storage):
        storage.set_item("currentConversationId", "abc")

        adapter = PersistenceAdapter(storage)
        storage.set_item("currentConversationId", "later")

        assert adapter.initial_conversation_id == "abc"
        assert adapter.get() == "later"

    def test_without_storage_is_inert(self):
        adapter = PersistenceAdapter(None)

        adapter.set("abc")
        adapter.unset()

        assert adapter.initial_conversation_id is None
        assert adapter.get() is None
        assert not adapter.enabled

    def test_storage_errors_are_absorbed(self, caplog):
        broken = MagicMock(spec=SessionStorage)
        broken.get_item.side_effect = OSError("read-only")
        broken.set_item.side_effect = OSError("read-only")
        broken.remove_item.side_effect = OSError("read-only")

        adapter = PersistenceAdapter(broken)
        adapter.set("abc")
        adapter.unset()

        assert adapter.initial_conversation_id is None
        assert "Could not write session pointer" in caplog.text

    @given(st.lists(st.one_of(st.none(), st.text(min_size=1)), min_size=1))
    def test_storage_matches_last_write(self, pointers: list[str | None]):
        """Property test: the stored key always reflects the last call."""
        storage = InMemorySessionStorage()
        adapter = PersistenceAdapter(storage)

        for pointer in pointers:
            if pointer is None:
                adapter.unset()
            else:
                adapter.set(pointer)

        assert storage.get_item("currentConversationId") == pointers[-1]


class TestStorageFactory:
    """Tests for the session storage factory."""

    def test_create_memory_storage(self):
        assert isinstance(create_session_storage("memory"), InMemorySessionStorage)

    def test_create_file_storage(self, tmp_path):
        storage = create_session_storage("file", directory=tmp_path, session_id="s")
        assert isinstance(storage, FileSessionStorage)

    def test_create_none_disables_storage(self):
        assert create_session_storage("none") is None

    def test_unknown_backend_raises(self):
        with pytest.raises(ValueError, match="Unsupported storage backend"):
            create_session_storage("redis")
