"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Conversation list rendering and selection
- Chat message rendering and scrolling
"""

from rich.markup import escape
from textual.containers import VerticalScroll
from textual.widgets import Label, ListItem, ListView, Static

from ..models import Conversation, Message


class ConversationItem(ListItem):
    """A conversation entry in the sidebar."""

    def __init__(self, conversation: Conversation, current: bool = False) -> None:
        super().__init__(
            Label(conversation.title, classes="conversation-title"),
            Label(
                f"{conversation.timestamp} · {conversation.description}",
                classes="conversation-meta",
            ),
        )
        self.conversation_id = conversation.id
        if current:
            self.add_class("--current")


class ConversationList(ListView):
    """Sidebar listing conversations, most recently active first."""

    BORDER_TITLE = "Conversations"

    async def show_conversations(
        self,
        conversations: list[Conversation],
        current_id: str | None
    ) -> None:
        """Replace the list contents."""
        await self.clear()
        await self.extend(
            ConversationItem(c, current=c.id == current_id) for c in conversations
        )
        self.border_subtitle = f"{len(conversations)}"

    def set_loading(self, loading: bool) -> None:
        self.border_subtitle = "loading..." if loading else f"{len(self.children)}"


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "New chat"
    ALLOW_SELECT = True

    async def show_messages(self, messages: list[Message]) -> None:
        """Replace the rendered history with ``messages``."""
        await self.remove_children()
        if not messages:
            await self.mount(Static("Type a message to start chatting.", classes="empty-chat"))
        else:
            await self.mount_all(self._render_message(m) for m in messages)
        self.scroll_end(animate=False)

    @staticmethod
    def _render_message(message: Message) -> Static:
        if message.role == "user":
            return Static(f"[b]You[/b]\n{escape(message.content)}", classes="user-message", markup=True)
        return Static(f"[b]Assistant[/b]\n{escape(message.content)}", classes="assistant-message", markup=True)
