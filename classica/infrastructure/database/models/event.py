"""Event catalog database model."""

from uuid import UUID, uuid4

from sqlalchemy import Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column

from classica.domain.entities import EventContext
from classica.infrastructure.database.models.base import Base, TimestampMixin


class EventModel(Base, TimestampMixin):
    """SQLAlchemy model for events table.

    The catalog is maintained elsewhere; this service only reads it.
    """

    __tablename__ = "events"

    id: Mapped[UUID] = mapped_column(PGUUID(as_uuid=True), primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    venue: Mapped[str] = mapped_column(String(255), nullable=False)
    program: Mapped[str] = mapped_column(Text, nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    difficulty: Mapped[str] = mapped_column(String(20), nullable=False, default="beginner")
    genre: Mapped[str] = mapped_column(String(50), nullable=False, default="orchestral")
    beginner_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Pricing
    original_price_cents: Mapped[int | None] = mapped_column(Integer, nullable=True)
    discounted_price_cents: Mapped[int | None] = mapped_column(Integer, nullable=True)
    tickets_available: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def to_entity(self) -> EventContext:
        """Convert to domain entity."""
        return EventContext(
            id=self.id,
            title=self.title,
            date=self.date,
            venue=self.venue,
            program=self.program,
            description=self.description,
            difficulty=self.difficulty,
            genre=self.genre,
            beginner_notes=self.beginner_notes,
            original_price_cents=self.original_price_cents,
            discounted_price_cents=self.discounted_price_cents,
            tickets_available=self.tickets_available,
        )
