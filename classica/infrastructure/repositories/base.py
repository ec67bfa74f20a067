"""Base repository with common persistence operations."""

from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from classica.infrastructure.database.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)
EntityType = TypeVar("EntityType")


class BaseRepository(Generic[ModelType, EntityType]):
    """Base repository over one SQLAlchemy model.

    Subclasses should set:
    - model_class: The SQLAlchemy model class
    - Implement to_entity on the model, and from_entity where rows are created
      from entities
    """

    model_class: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> EntityType | None:
        """Get entity by primary key."""
        result = await self.session.get(self.model_class, id)
        if result is None:
            return None
        return result.to_entity()

    async def create(self, entity: EntityType) -> EntityType:
        """Create a new entity."""
        model = self.model_class.from_entity(entity)
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return model.to_entity()
