"""Repository implementations - SQLAlchemy-based data access."""

from classica.infrastructure.repositories.chat_session_repository import (
    ChatSessionRepositoryImpl,
)
from classica.infrastructure.repositories.event_repository import EventRepositoryImpl
from classica.infrastructure.repositories.profile_repository import ProfileRepositoryImpl
from classica.infrastructure.repositories.turn_repository import TurnRepositoryImpl

__all__ = [
    "ChatSessionRepositoryImpl",
    "TurnRepositoryImpl",
    "EventRepositoryImpl",
    "ProfileRepositoryImpl",
]
