"""Session boundary - thin adapter over persistence for the conversation core."""

from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from classica.domain.entities import (
    ChatMode,
    ChatSession,
    ConversationTurn,
    EventContext,
    ExperienceLevel,
    Ratings,
    Role,
    UserProfile,
)
from classica.domain.errors import EventNotFoundError, SessionNotFoundError, ValidationError
from classica.domain.protocols import (
    ChatSessionRepository,
    EventRepository,
    ProfileRepository,
    TurnRepository,
)
from classica.infrastructure.repositories import (
    ChatSessionRepositoryImpl,
    EventRepositoryImpl,
    ProfileRepositoryImpl,
    TurnRepositoryImpl,
)
from classica.infrastructure.telemetry import get_logger, session_id_var

logger = get_logger(__name__)

DEFAULT_EXPERIENCE_LEVEL: ExperienceLevel = "new"


class SessionBoundary:
    """Persistence operations used by the chat and onboarding services.

    Sessions are created or reused, turns are only ever appended, and
    profiles are upserted. ``checkpoint`` commits the unit of work so far.
    """

    def __init__(
        self,
        db: AsyncSession,
        sessions: ChatSessionRepository,
        turns: TurnRepository,
        events: EventRepository,
        profiles: ProfileRepository,
    ):
        self.db = db
        self.sessions = sessions
        self.turns = turns
        self.events = events
        self.profiles = profiles

    @classmethod
    def from_db(cls, db: AsyncSession) -> "SessionBoundary":
        """Build a boundary backed by the SQLAlchemy repositories."""
        return cls(
            db=db,
            sessions=ChatSessionRepositoryImpl(db),
            turns=TurnRepositoryImpl(db),
            events=EventRepositoryImpl(db),
            profiles=ProfileRepositoryImpl(db),
        )

    # --- Catalog ---

    async def get_event(self, event_id: UUID) -> EventContext:
        """Get an event or raise EventNotFoundError."""
        event = await self.events.get_by_id(event_id)
        if event is None:
            raise EventNotFoundError(
                message="Event not found",
                details={"event_id": str(event_id)},
            )
        return event

    async def list_catalog(self, limit: int) -> list[EventContext]:
        return await self.events.list_upcoming(limit=limit)

    # --- Sessions ---

    async def get_owned_session(self, user_id: UUID, session_id: UUID) -> ChatSession:
        """Get a session owned by the user.

        Sessions owned by someone else are reported as missing.
        """
        session = await self.sessions.get_by_id(session_id)
        if session is None or not session.is_owned_by(user_id):
            raise SessionNotFoundError(
                message="Chat session not found",
                details={"session_id": str(session_id)},
            )
        return session

    async def open_session(
        self,
        user_id: UUID,
        session_id: UUID | None,
        mode: ChatMode,
        event_id: UUID | None,
    ) -> ChatSession:
        """Reuse the referenced session or create a new one.

        Raises:
            SessionNotFoundError: If the session is missing or not the user's
            ValidationError: If mode or event differ from the session's
        """
        if session_id is not None:
            session = await self.get_owned_session(user_id, session_id)
            if not session.matches(mode, event_id):
                raise ValidationError(
                    message="Session mode and event cannot change",
                    details={
                        "session_id": str(session.id),
                        "mode": session.mode,
                        "event_id": str(session.event_id) if session.event_id else None,
                    },
                )
            session_id_var.set(str(session.id))
            return session

        session = await self.sessions.create(
            ChatSession(id=uuid4(), user_id=user_id, mode=mode, event_id=event_id)
        )
        session_id_var.set(str(session.id))

        logger.info(
            "Chat session created",
            extra={
                "session_id": str(session.id),
                "mode": mode,
                "event_id": str(event_id) if event_id else None,
            },
        )
        return session

    async def list_sessions(self, user_id: UUID, limit: int) -> list[ChatSession]:
        return await self.sessions.list_by_user(user_id, limit=limit)

    # --- Turns ---

    async def append_turn(self, session_id: UUID, role: Role, content: str) -> ConversationTurn:
        """Append a turn and bump the session's activity timestamp."""
        turn = await self.turns.append(session_id, role, content)
        await self.sessions.touch(session_id)
        return turn

    async def read_history(self, session_id: UUID) -> list[ConversationTurn]:
        return await self.turns.list_by_session(session_id)

    # --- Profiles ---

    async def resolve_experience_level(self, user_id: UUID | None) -> ExperienceLevel:
        """Experience level from the user's profile, or the lowest tier."""
        if user_id is None:
            return DEFAULT_EXPERIENCE_LEVEL
        profile = await self.profiles.get_by_user_id(user_id)
        if profile is None:
            return DEFAULT_EXPERIENCE_LEVEL
        return profile.experience_level

    async def save_onboarding(
        self,
        user_id: UUID,
        answers: list[str],
        ratings: Ratings,
        experience_level: ExperienceLevel,
    ) -> UserProfile:
        """Upsert the user's profile with a completed onboarding result."""
        profile = await self.profiles.get_by_user_id(user_id)
        if profile is None:
            profile = UserProfile(id=uuid4(), user_id=user_id)
        profile.apply_onboarding(answers, ratings, experience_level)
        return await self.profiles.upsert(profile)

    # --- Unit of work ---

    async def checkpoint(self) -> None:
        """Commit everything written so far."""
        await self.db.commit()
