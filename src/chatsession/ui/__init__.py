"""Terminal UI module for chatsession.

Provides a Textual-based TUI on top of a SessionStore.

Module structure (each module hides a design decision):
- widgets.py: Conversation list and chat history rendering
- styles.py: CSS styling (layout decisions)
- app.py: Application orchestration (store subscription, user actions)
"""

from .app import ChatSessionApp, run_textual_tui
from .widgets import ChatHistoryWidget, ConversationItem, ConversationList

__all__ = [
    "ChatHistoryWidget",
    "ChatSessionApp",
    "ConversationItem",
    "ConversationList",
    "run_textual_tui",
]
