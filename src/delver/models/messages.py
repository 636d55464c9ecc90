"""Player-facing message feed.

The log is append-only. The renderer reads it newest-first with
``reversed()`` and wraps lines itself; nothing here knows about widths.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field

from delver.core.constants import WHITE
from delver.models.grid import Color


class Message(BaseModel):
    """A single line of the feed."""

    model_config = ConfigDict(frozen=True)

    text: str
    color: Color = WHITE


class MessageLog(BaseModel):
    """Ordered collection of messages, oldest first."""

    model_config = ConfigDict(extra="forbid")

    messages: list[Message] = Field(default_factory=list)

    def add(self, text: str, color: Color = WHITE) -> Message:
        message = Message(text=text, color=color)
        self.messages.append(message)
        return message

    @property
    def latest(self) -> Message | None:
        return self.messages[-1] if self.messages else None

    def texts(self) -> list[str]:
        return [message.text for message in self.messages]

    def __iter__(self) -> Iterator[Message]:  # type: ignore[override]
        return iter(self.messages)

    def __reversed__(self) -> Iterator[Message]:
        return reversed(self.messages)

    def __len__(self) -> int:
        return len(self.messages)


__all__ = ["Message", "MessageLog"]
