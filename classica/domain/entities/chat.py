"""Chat session and conversation turn entities."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal
from uuid import UUID


ChatMode = Literal["discovery", "learning"]
Role = Literal["user", "assistant"]

CHAT_MODES: tuple[ChatMode, ...] = ("discovery", "learning")


@dataclass(frozen=True)
class ConversationTurn:
    """One message in a conversation.

    Turns are immutable once created. Stored turns carry their session and
    sequence number; turns supplied by an anonymous client carry neither.
    """

    role: Role
    content: str
    id: UUID | None = None
    session_id: UUID | None = None
    sequence_number: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


@dataclass
class ChatSession:
    """A durable conversation context for an authenticated user.

    ``mode`` and ``event_id`` are fixed at creation.
    """

    id: UUID
    user_id: UUID
    mode: ChatMode
    event_id: UUID | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def is_owned_by(self, user_id: UUID) -> bool:
        """Check whether the session belongs to the given user."""
        return self.user_id == user_id

    def matches(self, mode: ChatMode, event_id: UUID | None) -> bool:
        """Check whether a request targets this session's mode and event."""
        return self.mode == mode and self.event_id == event_id
