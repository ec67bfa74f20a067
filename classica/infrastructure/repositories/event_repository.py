"""Event catalog repository implementation (read-only)."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from classica.domain.entities import EventContext
from classica.infrastructure.database.models.event import EventModel
from classica.infrastructure.repositories.base import BaseRepository


class EventRepositoryImpl(BaseRepository[EventModel, EventContext]):
    """SQLAlchemy implementation of EventRepository."""

    model_class = EventModel

    def __init__(self, session: AsyncSession):
        super().__init__(session)

    async def list_upcoming(self, limit: int = 50) -> list[EventContext]:
        """List catalog events ordered by date."""
        stmt = select(EventModel).order_by(EventModel.date).limit(limit)
        result = await self.session.execute(stmt)
        return [model.to_entity() for model in result.scalars().all()]
