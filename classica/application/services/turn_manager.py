"""Turn manager - one request/response turn of the concierge chat."""

from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID

from classica.application.prompts import build_chat_system_prompt
from classica.application.services.session_boundary import SessionBoundary
from classica.config import Settings
from classica.domain import directives
from classica.domain.entities import (
    ChatMode,
    ChatSession,
    ConversationTurn,
    EventContext,
)
from classica.domain.errors import (
    AppError,
    ConfigurationError,
    UpstreamGenerationError,
    ValidationError,
)
from classica.domain.protocols import GenerationProvider, LLMMessage
from classica.infrastructure.telemetry import (
    event_id_var,
    get_logger,
    record_chat_failure,
    record_chat_turn,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChatReply:
    """Result of one committed turn. ``session_id`` is None for anonymous callers."""

    session_id: UUID | None
    response: str


@dataclass(frozen=True)
class TurnView:
    """A stored turn prepared for display."""

    turn: ConversationTurn
    display_text: str
    ticket_event_id: str | None

    @classmethod
    def from_turn(cls, turn: ConversationTurn) -> "TurnView":
        if turn.role != "assistant":
            return cls(turn=turn, display_text=turn.content, ticket_event_id=None)
        ticket_event_id, display_text = directives.extract(turn.content)
        return cls(turn=turn, display_text=display_text, ticket_event_id=ticket_event_id)


class TurnManager:
    """Builds the effective history, prompts by mode, drains the generation
    stream into one reply and commits the turn.

    Authenticated callers get a durable session whose stored history is the
    only history used; anything the client sends as ``history`` is ignored.
    Anonymous callers get nothing stored, so their client-side history is
    used verbatim.
    """

    def __init__(
        self,
        boundary: SessionBoundary,
        llm: GenerationProvider,
        settings: Settings,
    ):
        self.boundary = boundary
        self.llm = llm
        self.settings = settings

    async def send(
        self,
        content: str,
        mode: ChatMode,
        user_id: UUID | None = None,
        session_id: UUID | None = None,
        event_id: UUID | None = None,
        history: Sequence[ConversationTurn] | None = None,
    ) -> ChatReply:
        """Run one chat turn to completion.

        Raises:
            ValidationError: learning mode without an event, or a session
                whose mode/event differ from the request
            ConfigurationError: no generation credential is configured
            EventNotFoundError: the learning event does not exist
            SessionNotFoundError: the session is missing or not the caller's
            UpstreamGenerationError: generation failed
        """
        if mode == "learning" and event_id is None:
            raise ValidationError(
                message="eventId is required for learning mode",
                details={"mode": mode},
            )
        if mode == "discovery":
            event_id = None

        if not self.llm.is_configured:
            raise ConfigurationError(
                message="Generation provider is not configured",
                setting="openai_api_key",
            )

        event: EventContext | None = None
        catalog: list[EventContext] = []
        if mode == "learning":
            event = await self.boundary.get_event(event_id)
            event_id_var.set(str(event.id))
        else:
            catalog = await self.boundary.list_catalog(self.settings.chat_catalog_limit)

        session: ChatSession | None = None
        if user_id is not None:
            session = await self.boundary.open_session(user_id, session_id, mode, event_id)
            await self.boundary.append_turn(session.id, "user", content)
            # The user turn stays even if generation fails below.
            await self.boundary.checkpoint()
            record_chat_turn(mode, "user", persisted=True)
            turns = await self.boundary.read_history(session.id)
        else:
            turns = [*(history or []), ConversationTurn(role="user", content=content)]
            record_chat_turn(mode, "user", persisted=False)

        experience_level = await self.boundary.resolve_experience_level(user_id)
        system_prompt = build_chat_system_prompt(
            mode,
            experience_level,
            events=catalog,
            event=event,
        )

        response = await self._generate(system_prompt, turns, mode)

        if session is not None:
            await self.boundary.append_turn(session.id, "assistant", response)
        record_chat_turn(mode, "assistant", persisted=session is not None)

        logger.info(
            "Chat turn committed",
            extra={
                "mode": mode,
                "session_id": str(session.id) if session else None,
                "history_length": len(turns),
                "response_length": len(response),
                "has_directive": directives.BUY_TICKET.extract(response).found,
            },
        )

        return ChatReply(session_id=session.id if session else None, response=response)

    async def _generate(
        self,
        system_prompt: str,
        turns: Sequence[ConversationTurn],
        mode: ChatMode,
    ) -> str:
        """Drain the generation stream into a single string."""
        messages = [LLMMessage(role="system", content=system_prompt)]
        messages.extend(LLMMessage(role=t.role, content=t.content) for t in turns)

        parts: list[str] = []
        try:
            async for delta in self.llm.chat_stream(
                messages,
                temperature=self.settings.chat_temperature,
                max_tokens=self.settings.chat_max_tokens,
            ):
                parts.append(delta)
        except AppError:
            record_chat_failure(mode)
            raise
        except Exception as e:
            record_chat_failure(mode)
            raise UpstreamGenerationError(
                message="Failed to generate a response",
                provider=self.llm.provider_name,
                operation="chat_stream",
                details={"error": str(e)},
            ) from e

        return "".join(parts)

    async def list_sessions(self, user_id: UUID) -> list[ChatSession]:
        """The caller's most recent sessions, newest first."""
        return await self.boundary.list_sessions(
            user_id, limit=self.settings.chat_session_list_limit
        )

    async def list_turns(self, user_id: UUID, session_id: UUID) -> list[TurnView]:
        """A session's turns in order, with directives stripped for display."""
        session = await self.boundary.get_owned_session(user_id, session_id)
        turns = await self.boundary.read_history(session.id)
        return [TurnView.from_turn(turn) for turn in turns]
