"""Event catalog entity as seen by prompt construction."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class EventContext:
    """Read-only view of a catalog event."""

    id: UUID
    title: str
    date: str
    venue: str
    program: str
    description: str
    difficulty: str
    genre: str
    beginner_notes: str | None = None
    original_price_cents: int | None = None
    discounted_price_cents: int | None = None
    tickets_available: int | None = None
