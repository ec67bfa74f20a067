"""Domain protocols - abstract interfaces for infrastructure implementations."""

from classica.domain.protocols.devices import (
    AudioPlayer,
    OnboardingBackend,
    Playback,
    SpeechCapture,
    TextInput,
)
from classica.domain.protocols.providers import (
    GenerationProvider,
    LLMMessage,
    LLMResponse,
    SpeechSynthesisProvider,
    TTSResult,
)
from classica.domain.protocols.repositories import (
    ChatSessionRepository,
    EventRepository,
    ProfileRepository,
    TurnRepository,
)

__all__ = [
    # Repositories
    "ChatSessionRepository",
    "TurnRepository",
    "EventRepository",
    "ProfileRepository",
    # Providers
    "GenerationProvider",
    "SpeechSynthesisProvider",
    "LLMMessage",
    "LLMResponse",
    "TTSResult",
    # Devices
    "SpeechCapture",
    "TextInput",
    "AudioPlayer",
    "Playback",
    "OnboardingBackend",
]
