"""Configuration constants.

Centralizes magic numbers, fixed texts and environment variable names.
"""

# Conversation summaries
DESCRIPTION_MAX_LENGTH = 100  # Characters kept from the latest reply
JUST_NOW = "Just now"
DEFAULT_CONVERSATION_TITLE = "New Chat"
EMPTY_CONVERSATION_DESCRIPTION = "No messages yet"

# Shown in the chat when a send fails
DEFAULT_ERROR_MESSAGE = "Something went wrong. Please try again."

# Durable session pointer
SESSION_POINTER_KEY = "currentConversationId"

# HTTP transport
DEFAULT_API_URL = "http://localhost:3000/api"
DEFAULT_TIMEOUT = 30.0  # Seconds
SESSION_COOKIE_NAME = "authjs.session-token"

# Environment variables read by the CLI
ENV_BACKEND = "CHATSESSION_BACKEND"
ENV_API_URL = "CHATSESSION_API_URL"
ENV_TIMEOUT = "CHATSESSION_TIMEOUT"
ENV_SESSION_COOKIE = "CHATSESSION_SESSION_COOKIE"
ENV_STORAGE = "CHATSESSION_STORAGE"
ENV_STATE_DIR = "CHATSESSION_STATE_DIR"
ENV_SESSION_ID = "CHATSESSION_SESSION_ID"
ENV_LOG_LEVEL = "CHATSESSION_LOG_LEVEL"
