"""Chat session repository implementation."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from classica.domain.entities import ChatSession
from classica.infrastructure.database.models.chat import ChatSessionModel
from classica.infrastructure.repositories.base import BaseRepository


class ChatSessionRepositoryImpl(BaseRepository[ChatSessionModel, ChatSession]):
    """SQLAlchemy implementation of ChatSessionRepository."""

    model_class = ChatSessionModel

    def __init__(self, session: AsyncSession):
        super().__init__(session)

    async def touch(self, session_id: UUID) -> None:
        """Bump updated_at. Mode and event stay as created."""
        stmt = (
            update(ChatSessionModel)
            .where(ChatSessionModel.id == session_id)
            .values(updated_at=datetime.now(UTC))
        )
        await self.session.execute(stmt)

    async def list_by_user(self, user_id: UUID, limit: int = 20) -> list[ChatSession]:
        """List a user's sessions, most recently active first."""
        stmt = (
            select(ChatSessionModel)
            .where(ChatSessionModel.user_id == user_id)
            .order_by(ChatSessionModel.updated_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [model.to_entity() for model in result.scalars().all()]
