"""User profile database model."""

from uuid import UUID, uuid4

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.dialects.postgresql import JSONB, UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column

from classica.domain.entities import UserProfile
from classica.infrastructure.database.models.base import Base, TimestampMixin


class UserProfileModel(Base, TimestampMixin):
    """SQLAlchemy model for user_profiles table."""

    __tablename__ = "user_profiles"

    id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True), nullable=False, unique=True, index=True
    )
    experience_level: Mapped[str] = mapped_column(String(20), nullable=False, default="new")
    onboarding_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    onboarding_answers: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)

    # Listening-test ratings, 1-10 per tier
    music_taste_easy: Mapped[int | None] = mapped_column(Integer, nullable=True)
    music_taste_medium: Mapped[int | None] = mapped_column(Integer, nullable=True)
    music_taste_hard: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def to_entity(self) -> UserProfile:
        """Convert to domain entity."""
        return UserProfile(
            id=self.id,
            user_id=self.user_id,
            experience_level=self.experience_level,  # type: ignore
            onboarding_completed=self.onboarding_completed,
            onboarding_answers=list(self.onboarding_answers or []),
            music_taste_easy=self.music_taste_easy,
            music_taste_medium=self.music_taste_medium,
            music_taste_hard=self.music_taste_hard,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, entity: UserProfile) -> "UserProfileModel":
        """Create from domain entity."""
        return cls(
            id=entity.id,
            user_id=entity.user_id,
            experience_level=entity.experience_level,
            onboarding_completed=entity.onboarding_completed,
            onboarding_answers=list(entity.onboarding_answers),
            music_taste_easy=entity.music_taste_easy,
            music_taste_medium=entity.music_taste_medium,
            music_taste_hard=entity.music_taste_hard,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
