"""Main Textual TUI application.

Renders a SessionStore and forwards user actions to it. The app never
changes session state itself; it subscribes to the store and redraws
the parts whose fields changed.
"""

import asyncio

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Input, ListView

from ..store import SessionStore
from .styles import APP_CSS
from .widgets import ChatHistoryWidget, ConversationItem, ConversationList


class ChatSessionApp(App):
    """Textual TUI for a chat session."""

    CSS = APP_CSS
    TITLE = "chatsession"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+n", "new_chat", "New Chat"),
        Binding("ctrl+r", "refresh", "Refresh"),
    ]

    def __init__(self, store: SessionStore) -> None:
        super().__init__()
        self._store = store
        self._unsubscribe = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ConversationList(id="conversation-list")
        yield ChatHistoryWidget(id="chat-history")
        yield Input(placeholder="Message (Enter to send)", id="chat-input")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self._unsubscribe = self._store.subscribe(self._handle_store_change)
        self.sub_title = self._store.repository.backend_type
        self.query_one("#chat-input", Input).focus()
        self.run_worker(self._startup(), group="load")

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def _startup(self) -> None:
        await self._render_messages()
        await self._store.load_conversations()
        if self._store.current_conversation_id is not None:
            await self._store.load_conversation(self._store.current_conversation_id)

    # ------------------------------------------------------------------
    # Store -> widgets
    # ------------------------------------------------------------------

    def _handle_store_change(self, store: SessionStore, fields: frozenset[str]) -> None:
        if "conversations" in fields or "current_conversation_id" in fields:
            self.call_later(self._render_conversations)
        if "messages" in fields:
            self.call_later(self._render_messages)
        if "is_loading_conversations" in fields:
            sidebar = self.query_one("#conversation-list", ConversationList)
            sidebar.set_loading(store.is_loading_conversations)
        if "is_loading" in fields:
            self.sub_title = "thinking..." if store.is_loading else store.repository.backend_type
        if "input_value" in fields:
            text_input = self.query_one("#chat-input", Input)
            if text_input.value != store.input_value:
                text_input.value = store.input_value

    async def _render_conversations(self) -> None:
        sidebar = self.query_one("#conversation-list", ConversationList)
        await sidebar.show_conversations(
            self._store.conversations,
            self._store.current_conversation_id
        )

    async def _render_messages(self) -> None:
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        await chat.show_messages(self._store.messages)
        chat.border_subtitle = self._store.current_conversation_id or "New chat"

    # ------------------------------------------------------------------
    # User actions -> store
    # ------------------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.value != self._store.input_value:
            self._store.set_input_value(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self._store.can_submit:
            self.run_worker(self._store.send_message(), group="send")

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        item = event.item
        if isinstance(item, ConversationItem):
            self.run_worker(self._store.load_conversation(item.conversation_id), group="load")

    def action_new_chat(self) -> None:
        """Clear the current conversation; the next send creates one."""
        self._store.new_chat()
        self.query_one("#chat-input", Input).focus()

    def action_refresh(self) -> None:
        """Reload the conversation list."""
        self.run_worker(self._store.load_conversations(), group="load")


async def run_textual_tui(store: SessionStore) -> None:
    """Run the Textual TUI.

    Args:
        store: Session store to display and drive
    """
    app = ChatSessionApp(store)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
