"""Repository protocols - abstract interfaces for data access."""

from typing import Protocol
from uuid import UUID

from classica.domain.entities import (
    ChatSession,
    ConversationTurn,
    EventContext,
    Role,
    UserProfile,
)


class ChatSessionRepository(Protocol):
    """Abstract interface for chat session data access."""

    async def get_by_id(self, session_id: UUID) -> ChatSession | None:
        """Get session by ID."""
        ...

    async def create(self, session: ChatSession) -> ChatSession:
        """Create a new session."""
        ...

    async def touch(self, session_id: UUID) -> None:
        """Bump the session's updated_at timestamp."""
        ...

    async def list_by_user(self, user_id: UUID, limit: int = 20) -> list[ChatSession]:
        """List a user's sessions, newest first."""
        ...


class TurnRepository(Protocol):
    """Append-only access to conversation turns."""

    async def append(self, session_id: UUID, role: Role, content: str) -> ConversationTurn:
        """Append a turn with the next sequence number."""
        ...

    async def list_by_session(self, session_id: UUID) -> list[ConversationTurn]:
        """List a session's turns in chronological order."""
        ...


class EventRepository(Protocol):
    """Read-only access to the event catalog."""

    async def get_by_id(self, event_id: UUID) -> EventContext | None:
        """Get an event by ID."""
        ...

    async def list_upcoming(self, limit: int = 50) -> list[EventContext]:
        """List a bounded number of catalog events."""
        ...


class ProfileRepository(Protocol):
    """Access to listener profiles."""

    async def get_by_user_id(self, user_id: UUID) -> UserProfile | None:
        """Get a user's profile."""
        ...

    async def upsert(self, profile: UserProfile) -> UserProfile:
        """Insert the profile or update the existing one for its user."""
        ...
