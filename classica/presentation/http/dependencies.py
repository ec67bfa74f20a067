"""FastAPI dependency providers for services and external providers."""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from classica.application.services import (
    ConciergeService,
    OnboardingService,
    SessionBoundary,
    TurnManager,
)
from classica.config import Settings, get_settings
from classica.domain.protocols import GenerationProvider, SpeechSynthesisProvider
from classica.infrastructure.database import get_db
from classica.infrastructure.providers.llm import OpenAIChatProvider
from classica.infrastructure.providers.tts import ElevenLabsTTSProvider


@lru_cache
def get_llm_provider() -> GenerationProvider:
    """Shared generation provider (one HTTP connection pool per process)."""
    return OpenAIChatProvider(get_settings())


@lru_cache
def get_tts_provider() -> SpeechSynthesisProvider:
    """Shared speech synthesis provider."""
    return ElevenLabsTTSProvider(get_settings())


def get_session_boundary(db: AsyncSession = Depends(get_db)) -> SessionBoundary:
    return SessionBoundary.from_db(db)


def get_turn_manager(
    boundary: SessionBoundary = Depends(get_session_boundary),
    llm: GenerationProvider = Depends(get_llm_provider),
    settings: Settings = Depends(get_settings),
) -> TurnManager:
    return TurnManager(boundary=boundary, llm=llm, settings=settings)


def get_onboarding_service(
    boundary: SessionBoundary = Depends(get_session_boundary),
    llm: GenerationProvider = Depends(get_llm_provider),
    tts: SpeechSynthesisProvider = Depends(get_tts_provider),
    settings: Settings = Depends(get_settings),
) -> OnboardingService:
    return OnboardingService(llm=llm, tts=tts, settings=settings, boundary=boundary)


def get_concierge_service(
    boundary: SessionBoundary = Depends(get_session_boundary),
    llm: GenerationProvider = Depends(get_llm_provider),
) -> ConciergeService:
    return ConciergeService(boundary=boundary, llm=llm)
