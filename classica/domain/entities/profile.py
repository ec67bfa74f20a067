"""User profile entity."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from classica.domain.entities.onboarding import ExperienceLevel, Ratings


@dataclass
class UserProfile:
    """Listener profile used to calibrate concierge tone and depth."""

    id: UUID
    user_id: UUID
    experience_level: ExperienceLevel = "new"
    onboarding_completed: bool = False
    onboarding_answers: list[str] = field(default_factory=list)
    music_taste_easy: int | None = None
    music_taste_medium: int | None = None
    music_taste_hard: int | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def apply_onboarding(
        self,
        answers: list[str],
        ratings: Ratings,
        experience_level: ExperienceLevel,
    ) -> None:
        """Record a completed onboarding run."""
        self.onboarding_completed = True
        self.onboarding_answers = list(answers)
        self.music_taste_easy = ratings.easy
        self.music_taste_medium = ratings.medium
        self.music_taste_hard = ratings.hard
        self.experience_level = experience_level
        self.updated_at = datetime.now(UTC)
