"""Conversation session state machine.

The store owns the state a chat UI renders (messages, the conversation
list, the current conversation, the input line and loading flags) and
is the only code allowed to change it. Consumers read the properties,
call the operations and subscribe to change notifications.

Sending follows Idle -> Sending -> Idle with exactly one network
attempt. The user message is appended before the round trip and is
never removed; a failed round trip appends an error message instead of
the reply.
"""

import logging
from typing import Callable

from ..config import JUST_NOW
from ..formatting import truncate
from ..messages import MessageFactory
from ..models import Conversation, Message
from ..persistence import PersistenceAdapter
from ..repository import ConversationRepository, RepositoryError

logger = logging.getLogger(__name__)

Listener = Callable[["SessionStore", frozenset[str]], None]


class SessionStore:
    """State container for one chat session.

    Collaborators are injected so that several independent stores can
    exist side by side (one per UI, one per test).

    Example:
        store = SessionStore(repository, PersistenceAdapter(storage))
        unsubscribe = store.subscribe(lambda s, fields: render(s))
        await store.load_conversations()
        store.set_input_value("Hello")
        await store.send_message()
    """

    def __init__(
        self,
        repository: ConversationRepository,
        persistence: PersistenceAdapter | None = None,
        message_factory: MessageFactory | None = None,
    ) -> None:
        self._repository = repository
        self._persistence = persistence or PersistenceAdapter()
        self._factory = message_factory or MessageFactory()

        self._messages: list[Message] = []
        self._conversations: list[Conversation] = []
        self._current_conversation_id: str | None = self._persistence.initial_conversation_id
        self._input_value = ""
        self._is_loading = False
        self._is_loading_conversations = False

        self._listeners: list[Listener] = []
        # Latest request number per load operation; older results are dropped
        self._conversations_request = 0
        self._conversation_request = 0
        # Bumped on every pointer change; a history load started before one is dropped
        self._pointer_version = 0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def repository(self) -> ConversationRepository:
        return self._repository

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    @property
    def conversations(self) -> list[Conversation]:
        return list(self._conversations)

    @property
    def current_conversation_id(self) -> str | None:
        return self._current_conversation_id

    @property
    def input_value(self) -> str:
        return self._input_value

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_loading_conversations(self) -> bool:
        return self._is_loading_conversations

    @property
    def has_messages(self) -> bool:
        return len(self._messages) > 0

    @property
    def has_conversations(self) -> bool:
        return len(self._conversations) > 0

    @property
    def can_submit(self) -> bool:
        """Whether send_message would do anything right now."""
        return bool(self._input_value.strip()) and not self._is_loading

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after every state change.

        The listener receives the store and the names of the fields that
        changed.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, *fields: str) -> None:
        changed = frozenset(fields)
        for listener in list(self._listeners):
            try:
                listener(self, changed)
            except Exception:
                logger.exception("Store listener failed")

    # ------------------------------------------------------------------
    # Sync actions
    # ------------------------------------------------------------------

    def set_input_value(self, value: str) -> None:
        self._input_value = value
        self._notify("input_value")

    def clear_input(self) -> None:
        self._input_value = ""
        self._notify("input_value")

    def clear_messages(self) -> None:
        self._messages = []
        self._notify("messages")

    def set_current_conversation(self, conversation_id: str | None) -> None:
        """Point the session at a conversation and persist the pointer.

        Args:
            conversation_id: Conversation to display, or None for none
        """
        self._set_pointer(conversation_id)
        self._notify("current_conversation_id")

    def _set_pointer(self, conversation_id: str | None) -> None:
        self._current_conversation_id = conversation_id
        self._pointer_version += 1
        if conversation_id is None:
            self._persistence.unset()
        else:
            self._persistence.set(conversation_id)

    def new_chat(self) -> None:
        """Start a new chat. The conversation is created on the first send."""
        self._set_pointer(None)
        self._messages = []
        self._notify("current_conversation_id", "messages")

    # ------------------------------------------------------------------
    # Async actions
    # ------------------------------------------------------------------

    async def load_conversations(self) -> None:
        """Replace the conversation list with the backend's.

        Failures are logged and leave the list as it was.
        """
        self._conversations_request += 1
        request_id = self._conversations_request
        self._is_loading_conversations = True
        self._notify("is_loading_conversations")

        try:
            conversations = await self._repository.list_conversations()
        except RepositoryError:
            logger.error("Failed to load conversations", exc_info=True)
        else:
            if request_id == self._conversations_request:
                self._conversations = list(conversations)
                self._notify("conversations")
            else:
                logger.debug(
                    "Discarding stale conversation list (request %d, latest %d)",
                    request_id, self._conversations_request
                )
        finally:
            if request_id == self._conversations_request:
                self._is_loading_conversations = False
                self._notify("is_loading_conversations")

    async def create_new_conversation(self, title: str | None = None) -> Conversation:
        """Create a conversation and make it current.

        Returns:
            The created conversation

        Raises:
            RepositoryError: If the backend could not create it; the
                store is left untouched
        """
        conversation = await self._repository.create_conversation(title)

        self._set_pointer(conversation.id)
        self._conversations.insert(0, conversation)
        self._messages = []
        self._notify("current_conversation_id", "conversations", "messages")
        return conversation

    async def load_conversation(self, conversation_id: str) -> None:
        """Display an existing conversation.

        On failure the pointer and the messages keep their previous
        values; the error is only logged. A result is also dropped when
        the pointer moved while it was loading (new chat, new
        conversation or another selection).

        Args:
            conversation_id: Conversation to load
        """
        self._conversation_request += 1
        request_id = self._conversation_request
        pointer_version = self._pointer_version
        self._is_loading = True
        self._notify("is_loading")

        try:
            messages = await self._repository.list_messages(conversation_id)
        except RepositoryError:
            logger.error("Failed to load conversation %s", conversation_id, exc_info=True)
        else:
            if request_id == self._conversation_request and pointer_version == self._pointer_version:
                self._set_pointer(conversation_id)
                self._messages = list(messages)
                self._notify("current_conversation_id", "messages")
            else:
                logger.debug("Discarding stale messages for conversation %s", conversation_id)
        finally:
            if request_id == self._conversation_request:
                self._is_loading = False
                self._notify("is_loading")

    async def send_message(self) -> None:
        """Send the current input as a user message.

        Does nothing when the input is blank or a request is already in
        flight. Creates a conversation first when none is current; if
        that fails the input is kept and nothing else changes.
        """
        content = self._input_value.strip()
        if not content or self._is_loading:
            return

        if self._current_conversation_id is None:
            try:
                await self.create_new_conversation()
            except RepositoryError:
                logger.error("Could not create a conversation, message not sent", exc_info=True)
                return

        conversation_id = self._current_conversation_id

        self._messages.append(self._factory.user(content))
        self._input_value = ""
        self._is_loading = True
        self._notify("messages", "input_value", "is_loading")

        try:
            reply = await self._repository.send_message(conversation_id, content)
        except RepositoryError:
            logger.error("Chat error in conversation %s", conversation_id, exc_info=True)
            self._messages.append(self._factory.error())
            self._notify("messages")
        else:
            self._messages.append(self._factory.assistant(reply.content))
            self._reconcile(conversation_id, reply.content)
            self._notify("messages", "conversations")
        finally:
            self._is_loading = False
            self._notify("is_loading")

    def _reconcile(self, conversation_id: str, latest: str) -> None:
        """Refresh a conversation's summary and move it to the front."""
        for index, conversation in enumerate(self._conversations):
            if conversation.id == conversation_id:
                updated = conversation.model_copy(
                    update={"description": truncate(latest), "timestamp": JUST_NOW}
                )
                del self._conversations[index]
                self._conversations.insert(0, updated)
                return
