"""User profile repository implementation."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from classica.domain.entities import UserProfile
from classica.infrastructure.database.models.profile import UserProfileModel
from classica.infrastructure.repositories.base import BaseRepository


class ProfileRepositoryImpl(BaseRepository[UserProfileModel, UserProfile]):
    """SQLAlchemy implementation of ProfileRepository."""

    model_class = UserProfileModel

    def __init__(self, session: AsyncSession):
        super().__init__(session)

    async def _get_model(self, user_id: UUID) -> UserProfileModel | None:
        stmt = select(UserProfileModel).where(UserProfileModel.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user_id(self, user_id: UUID) -> UserProfile | None:
        """Get a user's profile."""
        model = await self._get_model(user_id)
        if model is None:
            return None
        return model.to_entity()

    async def upsert(self, profile: UserProfile) -> UserProfile:
        """Insert the profile, or overwrite the existing row for its user."""
        model = await self._get_model(profile.user_id)
        if model is None:
            return await self.create(profile)

        model.experience_level = profile.experience_level
        model.onboarding_completed = profile.onboarding_completed
        model.onboarding_answers = list(profile.onboarding_answers)
        model.music_taste_easy = profile.music_taste_easy
        model.music_taste_medium = profile.music_taste_medium
        model.music_taste_hard = profile.music_taste_hard
        await self.session.flush()
        await self.session.refresh(model)
        return model.to_entity()
