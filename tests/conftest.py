"""Pytest configuration and shared fixtures."""
from unittest.mock import AsyncMock, MagicMock, Mock

import pytest

from chatsession.messages import MessageFactory
from chatsession.models import ChatReply, Conversation, Message
from chatsession.persistence import InMemorySessionStorage, PersistenceAdapter
from chatsession.repository import ConversationRepository
from chatsession.store import SessionStore


@pytest.fixture
def sample_conversations():
    """Return a server-ordered conversation list."""
    return [
        Conversation(id="1", title="Chat 1", description="Desc 1", timestamp="1h ago"),
        Conversation(id="2", title="Chat 2", description="Desc 2", timestamp="2h ago"),
        Conversation(id="3", title="Chat 3", description="Desc 3", timestamp="3h ago"),
    ]


@pytest.fixture
def sample_messages():
    """Return a short chronological history."""
    return [
        Message(id="m1", role="user", content="Hello"),
        Message(id="m2", role="assistant", content="Hi there!"),
    ]


@pytest.fixture
def repository():
    """Return a repository mock with successful default answers."""
    repo = MagicMock(spec=ConversationRepository)
    repo.list_conversations = AsyncMock(return_value=[])
    repo.create_conversation = AsyncMock(return_value=Conversation(
        id="new-conv",
        title="New Chat",
        description="",
        timestamp="Just now",
    ))
    repo.list_messages = AsyncMock(return_value=[])
    repo.send_message = AsyncMock(return_value=ChatReply(id="msg-1", content="Hello human!"))
    repo.close = AsyncMock()
    return repo


@pytest.fixture
def message_factory():
    """Return a factory that records calls and builds real messages."""
    return Mock(wraps=MessageFactory())


@pytest.fixture
def storage():
    """Return empty session storage."""
    return InMemorySessionStorage()


@pytest.fixture
def persistence(storage):
    """Return a pointer adapter over the session storage."""
    return PersistenceAdapter(storage)


@pytest.fixture
def store(repository, persistence, message_factory):
    """Return a fresh store wired to mocks."""
    return SessionStore(repository, persistence, message_factory)
