"""Onboarding service - server side of the onboarding interview contract."""

import random
from collections.abc import Sequence
from uuid import UUID

from classica.application.prompts import (
    ONBOARDING_QUESTIONS,
    build_onboarding_reply_messages,
)
from classica.application.services.session_boundary import SessionBoundary
from classica.config import Settings
from classica.domain.entities import ExperienceLevel, QuestionSet, Ratings, TrackRef
from classica.domain.errors import (
    AppError,
    ConfigurationError,
    SpeechError,
    UpstreamGenerationError,
    ValidationError,
)
from classica.domain.music_catalog import pick_tracks_per_tier
from classica.domain.protocols import GenerationProvider, SpeechSynthesisProvider
from classica.domain.scoring import score
from classica.infrastructure.telemetry import get_logger, record_onboarding_completion

logger = get_logger(__name__)


class OnboardingService:
    """Questions, spoken acknowledgments, speech and scoring for onboarding."""

    def __init__(
        self,
        llm: GenerationProvider,
        tts: SpeechSynthesisProvider,
        settings: Settings,
        boundary: SessionBoundary | None = None,
        rng: random.Random | None = None,
    ):
        self.llm = llm
        self.tts = tts
        self.settings = settings
        self.boundary = boundary
        self.rng = rng or random.Random()

    def get_questions(self) -> QuestionSet:
        """The interview script with a fresh track draw per tier."""
        tracks = pick_tracks_per_tier(self.rng)
        return QuestionSet(
            questions=ONBOARDING_QUESTIONS,
            tracks=tuple(TrackRef.from_track(track) for track in tracks),
        )

    async def reply(
        self,
        question_index: int,
        user_answer: str,
        previous_answers: Sequence[str] = (),
    ) -> str:
        """Generate a short acknowledgment of one answer."""
        if not 0 <= question_index < len(ONBOARDING_QUESTIONS):
            raise ValidationError(
                message="questionIndex is out of range",
                details={"question_index": question_index},
            )
        if not self.llm.is_configured:
            raise ConfigurationError(
                message="Generation provider is not configured",
                setting="openai_api_key",
            )

        messages = build_onboarding_reply_messages(
            question_index, user_answer, previous_answers
        )
        try:
            result = await self.llm.chat(
                messages,
                temperature=self.settings.onboarding_reply_temperature,
                max_tokens=self.settings.onboarding_reply_max_tokens,
            )
        except AppError:
            raise
        except Exception as e:
            raise UpstreamGenerationError(
                message="Failed to generate onboarding reply",
                provider=self.llm.provider_name,
                operation="chat",
            ) from e

        return result.content

    async def speak(self, text: str) -> bytes:
        """Synthesize text to MP3 audio."""
        if not self.tts.is_configured:
            raise ConfigurationError(
                message="Speech synthesis provider is not configured",
                setting="elevenlabs_api_key",
            )
        try:
            result = await self.tts.synthesize(text)
        except AppError:
            raise
        except Exception as e:
            raise SpeechError(
                message="Speech synthesis failed",
                provider=self.tts.provider_name,
                operation="synthesize",
            ) from e
        return result.audio_data

    async def complete(
        self,
        user_id: UUID,
        answers: Sequence[str],
        ratings: Ratings,
    ) -> ExperienceLevel:
        """Score the run and store it on the user's profile."""
        if self.boundary is None:
            raise RuntimeError("OnboardingService.complete needs a session boundary")
        if not answers:
            raise ValidationError(message="At least one answer is required")

        level = score(answers, ratings)
        await self.boundary.save_onboarding(user_id, list(answers), ratings, level)
        record_onboarding_completion(level)

        logger.info(
            "Onboarding completed",
            extra={
                "experience_level": level,
                "answer_count": len(answers),
                "average_rating": round(ratings.average, 2),
            },
        )
        return level
