"""Chat session and chat turn database models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from classica.domain.entities import ChatSession, ConversationTurn
from classica.infrastructure.database.models.base import Base, TimestampMixin, utcnow


class ChatSessionModel(Base, TimestampMixin):
    """SQLAlchemy model for chat_sessions table."""

    __tablename__ = "chat_sessions"

    id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), nullable=False, index=True)
    event_id: Mapped[UUID | None] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("events.id", ondelete="SET NULL"),
        nullable=True,
    )
    mode: Mapped[str] = mapped_column(String(20), nullable=False, default="discovery")

    # Relationships
    turns = relationship(
        "ChatTurnModel",
        back_populates="session",
        order_by="ChatTurnModel.sequence_number",
        cascade="all, delete-orphan",
    )

    def to_entity(self) -> ChatSession:
        """Convert to domain entity."""
        return ChatSession(
            id=self.id,
            user_id=self.user_id,
            mode=self.mode,  # type: ignore
            event_id=self.event_id,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, entity: ChatSession) -> "ChatSessionModel":
        """Create from domain entity."""
        return cls(
            id=entity.id,
            user_id=entity.user_id,
            mode=entity.mode,
            event_id=entity.event_id,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


class ChatTurnModel(Base):
    """SQLAlchemy model for chat_turns table. Rows are insert-only."""

    __tablename__ = "chat_turns"
    __table_args__ = (
        UniqueConstraint("session_id", "sequence_number", name="uq_chat_turns_session_seq"),
    )

    id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), primary_key=True, default=uuid4)
    session_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("chat_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Ordering
    sequence_number: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    # Relationships
    session = relationship("ChatSessionModel", back_populates="turns")

    def to_entity(self) -> ConversationTurn:
        """Convert to domain entity."""
        return ConversationTurn(
            id=self.id,
            session_id=self.session_id,
            role=self.role,  # type: ignore
            content=self.content,
            sequence_number=self.sequence_number,
            created_at=self.created_at,
        )
