"""Data models shared by the repository, the message factory and the store.

These mirror the wire format of the conversation API; field aliases
keep the camelCase names used on the wire.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant"]


class Conversation(BaseModel):
    """A conversation summary as shown in the conversation list."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Conversation identifier")
    title: str = Field(description="Display title")
    description: str = Field(default="", description="Preview of the latest message")
    timestamp: str = Field(default="", description="Relative activity time, e.g. '2h ago'")


class Message(BaseModel):
    """A single chat message."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str | None = Field(default=None, description="Server-assigned identifier")
    role: Role = Field(description="Author of the message")
    content: str = Field(description="Message text")
    conversation_id: str | None = Field(
        default=None,
        alias="conversationId",
        description="Owning conversation (server side only)"
    )
    created_at: datetime | None = Field(
        default=None,
        alias="createdAt",
        description="Creation time (server side only)"
    )


class ChatReply(BaseModel):
    """The assistant reply returned by a send round trip."""

    model_config = ConfigDict(frozen=True)

    id: str
    role: Literal["assistant"] = "assistant"
    content: str
