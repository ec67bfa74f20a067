"""Client-side device ports used by the onboarding interview.

These wrap whatever the host offers for speech capture, manual text entry
and audio output. Every handle they return must be releasable.
"""

from typing import Protocol

from classica.domain.entities import ExperienceLevel, QuestionSet, Ratings


class SpeechCapture(Protocol):
    """Best-effort single-utterance speech-to-text."""

    @property
    def is_available(self) -> bool:
        ...

    async def capture(self) -> str:
        """Capture and transcribe one utterance. May raise or return ''."""
        ...

    def stop(self) -> None:
        """Abort any in-flight capture. Safe to call when idle."""
        ...


class TextInput(Protocol):
    """Manual text entry used when speech capture cannot produce an answer."""

    async def prompt(self, message: str) -> str | None:
        ...


class Playback(Protocol):
    """Handle to one playing audio instance."""

    @property
    def is_playing(self) -> bool:
        ...

    def pause(self) -> None:
        """Pause and release the instance. Idempotent."""
        ...

    async def wait(self) -> None:
        """Resolve when playback ends, errors or is paused."""
        ...


class AudioPlayer(Protocol):
    """Audio output. ``source`` is synthesized audio bytes or a track URL."""

    async def play(self, source: bytes | str) -> Playback:
        ...


class OnboardingBackend(Protocol):
    """The onboarding wire contract as seen from the interview engine."""

    async def get_questions(self) -> QuestionSet:
        ...

    async def reply(
        self,
        question_index: int,
        user_answer: str,
        previous_answers: list[str],
    ) -> str:
        ...

    async def speak(self, text: str) -> bytes:
        ...

    async def complete(self, answers: list[str], ratings: Ratings) -> ExperienceLevel:
        ...
