"""SQLAlchemy database models."""

from classica.infrastructure.database.models.base import Base, TimestampMixin
from classica.infrastructure.database.models.chat import ChatSessionModel, ChatTurnModel
from classica.infrastructure.database.models.event import EventModel
from classica.infrastructure.database.models.profile import UserProfileModel

__all__ = [
    "Base",
    "TimestampMixin",
    # Catalog
    "EventModel",
    # Chat
    "ChatSessionModel",
    "ChatTurnModel",
    # Profiles
    "UserProfileModel",
]
