"""Domain entities - pure Python dataclasses representing business objects."""

from classica.domain.entities.chat import (
    CHAT_MODES,
    ChatMode,
    ChatSession,
    ConversationTurn,
    Role,
)
from classica.domain.entities.event import EventContext
from classica.domain.entities.onboarding import (
    DEFAULT_RATING,
    EXPERIENCE_LEVELS,
    TIERS,
    ExperienceLevel,
    MusicTrack,
    QuestionSet,
    Ratings,
    Tier,
    TrackRef,
    tier_for_index,
)
from classica.domain.entities.profile import UserProfile

__all__ = [
    "CHAT_MODES",
    "ChatMode",
    "ChatSession",
    "ConversationTurn",
    "Role",
    "EventContext",
    "DEFAULT_RATING",
    "EXPERIENCE_LEVELS",
    "TIERS",
    "ExperienceLevel",
    "MusicTrack",
    "QuestionSet",
    "Ratings",
    "Tier",
    "TrackRef",
    "tier_for_index",
    "UserProfile",
]
