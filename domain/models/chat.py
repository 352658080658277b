from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from .values import ChatRole


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ChatMessage:
    """A single conversational turn with the assistant."""

    role: ChatRole
    content: str
    timestamp: datetime = field(default_factory=_utcnow)

    @classmethod
    def user(cls, content: str, at: datetime | None = None) -> "ChatMessage":
        return cls(role=ChatRole.USER, content=content, timestamp=at or _utcnow())

    @classmethod
    def assistant(cls, content: str, at: datetime | None = None) -> "ChatMessage":
        return cls(role=ChatRole.ASSISTANT, content=content, timestamp=at or _utcnow())

    @classmethod
    def system(cls, content: str, at: datetime | None = None) -> "ChatMessage":
        return cls(role=ChatRole.SYSTEM, content=content, timestamp=at or _utcnow())
