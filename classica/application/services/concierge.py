"""Event concierge helpers outside the chat loop."""

from uuid import UUID

from classica.application.prompts import build_beginner_notes_messages
from classica.application.services.session_boundary import SessionBoundary
from classica.domain.errors import AppError, ConfigurationError, UpstreamGenerationError
from classica.domain.protocols import GenerationProvider
from classica.infrastructure.telemetry import get_logger

logger = get_logger(__name__)

BEGINNER_NOTES_MAX_TOKENS = 512


class ConciergeService:
    def __init__(self, boundary: SessionBoundary, llm: GenerationProvider):
        self.boundary = boundary
        self.llm = llm

    async def generate_beginner_notes(self, event_id: UUID) -> str:
        """Short beginner-friendly notes for one event.

        Notes are generated on demand and not stored.
        """
        event = await self.boundary.get_event(event_id)
        if not self.llm.is_configured:
            raise ConfigurationError(
                message="Generation provider is not configured",
                setting="openai_api_key",
            )

        try:
            result = await self.llm.chat(
                build_beginner_notes_messages(event),
                max_tokens=BEGINNER_NOTES_MAX_TOKENS,
            )
        except AppError:
            raise
        except Exception as e:
            raise UpstreamGenerationError(
                message="Failed to generate beginner notes",
                provider=self.llm.provider_name,
                operation="chat",
            ) from e

        logger.info(
            "Beginner notes generated",
            extra={"event_id": str(event_id), "length": len(result.content)},
        )
        return result.content
