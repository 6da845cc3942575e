"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
"""

APP_CSS = """
Screen {
    layout: grid;
    grid-size: 2 2;
    grid-columns: 36 1fr;
    grid-rows: 1fr auto;
    background: $background;
}

#conversation-list {
    row-span: 2;
    height: 100%;
    background: $panel;
    border: round $accent 60%;
    border-title-color: $accent;
    border-title-style: bold;

    &:focus-within {
        border: round $accent;
    }

    & > ConversationItem {
        padding: 0 1;
    }

    & > ConversationItem.--current {
        background: $accent 20%;
    }
}

.conversation-title {
    text-style: bold;
}

.conversation-meta {
    color: $text-muted;
}

#chat-history {
    height: 100%;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;

    &:focus {
        border: round $primary;
    }
}

.user-message {
    border-left: thick $warning;
    padding: 0 1;
    margin: 1 0 0 0;
}

.assistant-message {
    border-left: thick $success;
    padding: 0 1;
    margin: 1 0 0 0;
}

.empty-chat {
    color: $text-muted;
    margin: 1 0;
}

#chat-input {
    height: 3;
    border: tall $border;

    &:focus {
        border: tall $primary;
    }
}
"""
