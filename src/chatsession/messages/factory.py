"""Pure constructors for chat messages.

The store receives a factory instance instead of building messages
itself, so the way messages are created can be replaced in tests.
"""

from ..config import DEFAULT_ERROR_MESSAGE
from ..models import Message


class MessageFactory:
    """Builds user, assistant and error-fallback messages."""

    def __init__(self, error_text: str = DEFAULT_ERROR_MESSAGE) -> None:
        self._error_text = error_text

    def user(self, content: str) -> Message:
        return Message(role="user", content=content)

    def assistant(self, content: str) -> Message:
        return Message(role="assistant", content=content)

    def error(self, detail: str | None = None) -> Message:
        """Build the assistant message shown when a send fails.

        Args:
            detail: Text to show instead of the fixed apology

        Returns:
            Assistant message carrying ``detail`` or the fallback text
        """
        return self.assistant(detail or self._error_text)
