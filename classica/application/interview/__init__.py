"""Onboarding interview: phase machine, scoped resources and engine."""

from classica.application.interview.client import OnboardingApiClient
from classica.application.interview.engine import (
    InterviewEngine,
    InterviewResult,
    InterviewState,
)
from classica.application.interview.phases import (
    Done,
    Ended,
    Music,
    Phase,
    Question,
    Transition,
    Welcome,
    advance,
)
from classica.application.interview.resources import (
    AudioChannel,
    CallTimer,
    ListeningWindow,
    format_duration,
)

__all__ = [
    "InterviewEngine",
    "InterviewResult",
    "InterviewState",
    "OnboardingApiClient",
    "Phase",
    "Welcome",
    "Question",
    "Transition",
    "Music",
    "Done",
    "Ended",
    "advance",
    "AudioChannel",
    "CallTimer",
    "ListeningWindow",
    "format_duration",
]
