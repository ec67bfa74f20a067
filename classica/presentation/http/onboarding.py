"""Onboarding interview endpoints."""

import base64

from fastapi import APIRouter, Depends
from pydantic import Field

from classica.application.services import OnboardingService
from classica.domain.entities import ExperienceLevel, Ratings, Tier
from classica.domain.entities.onboarding import DEFAULT_RATING, MAX_RATING, MIN_RATING
from classica.infrastructure.auth import AuthContext, get_current_user
from classica.presentation.http.dependencies import get_onboarding_service
from classica.presentation.http.schemas import CamelModel

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


# Request/Response models
class TrackResponse(CamelModel):
    id: int
    file: str
    tier: Tier


class QuestionsResponse(CamelModel):
    questions: list[str]
    tracks: list[TrackResponse]


class ReplyRequest(CamelModel):
    question_index: int = Field(..., ge=0)
    user_answer: str = Field(..., min_length=1, max_length=2000)
    previous_answers: list[str] = Field(default_factory=list)


class ReplyResponse(CamelModel):
    text: str


class SpeakRequest(CamelModel):
    text: str = Field(..., min_length=1, max_length=2000)


class SpeakResponse(CamelModel):
    audio_base64: str


class RatingsPayload(CamelModel):
    easy: int = Field(default=DEFAULT_RATING, ge=MIN_RATING, le=MAX_RATING)
    medium: int = Field(default=DEFAULT_RATING, ge=MIN_RATING, le=MAX_RATING)
    hard: int = Field(default=DEFAULT_RATING, ge=MIN_RATING, le=MAX_RATING)


class CompleteRequest(CamelModel):
    answers: list[str] = Field(..., min_length=1, max_length=3)
    ratings: RatingsPayload


class CompleteResponse(CamelModel):
    experience_level: ExperienceLevel


# Endpoints
@router.get("/questions", response_model=QuestionsResponse)
async def get_questions(
    service: OnboardingService = Depends(get_onboarding_service),
) -> QuestionsResponse:
    """Interview questions plus one randomly drawn track per tier."""
    question_set = service.get_questions()
    return QuestionsResponse(
        questions=list(question_set.questions),
        tracks=[TrackResponse(id=t.id, file=t.file, tier=t.tier) for t in question_set.tracks],
    )


@router.post("/reply", response_model=ReplyResponse)
async def reply(
    request: ReplyRequest,
    service: OnboardingService = Depends(get_onboarding_service),
) -> ReplyResponse:
    """Short spoken-style acknowledgment of one answer."""
    text = await service.reply(
        request.question_index,
        request.user_answer,
        request.previous_answers,
    )
    return ReplyResponse(text=text)


@router.post("/speak", response_model=SpeakResponse)
async def speak(
    request: SpeakRequest,
    service: OnboardingService = Depends(get_onboarding_service),
) -> SpeakResponse:
    """Synthesize text; audio is returned base64-encoded MP3."""
    audio = await service.speak(request.text)
    return SpeakResponse(audio_base64=base64.b64encode(audio).decode("ascii"))


@router.post("/complete", response_model=CompleteResponse)
async def complete(
    request: CompleteRequest,
    auth: AuthContext = Depends(get_current_user),
    service: OnboardingService = Depends(get_onboarding_service),
) -> CompleteResponse:
    """Score the interview and save it to the caller's profile."""
    ratings = Ratings(
        easy=request.ratings.easy,
        medium=request.ratings.medium,
        hard=request.ratings.hard,
    )
    level = await service.complete(auth.user_id, request.answers, ratings)
    return CompleteResponse(experience_level=level)
