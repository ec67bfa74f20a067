"""Application services - orchestrate domain logic over infrastructure."""

from classica.application.services.concierge import ConciergeService
from classica.application.services.onboarding import OnboardingService
from classica.application.services.session_boundary import SessionBoundary
from classica.application.services.turn_manager import ChatReply, TurnManager, TurnView

__all__ = [
    "SessionBoundary",
    "TurnManager",
    "ChatReply",
    "TurnView",
    "OnboardingService",
    "ConciergeService",
]
