"""Conversation turn repository implementation."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from classica.domain.entities import ConversationTurn, Role
from classica.infrastructure.database.models.chat import ChatTurnModel


class TurnRepositoryImpl:
    """Append-only SQLAlchemy implementation of TurnRepository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def append(self, session_id: UUID, role: Role, content: str) -> ConversationTurn:
        """Insert a turn with the next sequence number for its session."""
        model = ChatTurnModel(
            id=uuid4(),
            session_id=session_id,
            role=role,
            content=content,
            sequence_number=await self.get_next_sequence_number(session_id),
            created_at=datetime.now(UTC),
        )
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return model.to_entity()

    async def list_by_session(self, session_id: UUID) -> list[ConversationTurn]:
        """List turns for a session in chronological order."""
        stmt = (
            select(ChatTurnModel)
            .where(ChatTurnModel.session_id == session_id)
            .order_by(ChatTurnModel.sequence_number)
        )
        result = await self.session.execute(stmt)
        return [model.to_entity() for model in result.scalars().all()]

    async def get_next_sequence_number(self, session_id: UUID) -> int:
        """Get the next sequence number for a session."""
        stmt = select(func.max(ChatTurnModel.sequence_number)).where(
            ChatTurnModel.session_id == session_id
        )
        result = await self.session.execute(stmt)
        max_seq = result.scalar()
        return (max_seq or 0) + 1
