"""Provider protocols - abstract interfaces for external services."""

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Protocol


@dataclass
class LLMMessage:
    """A message for LLM chat completion."""

    role: str  # 'system', 'user', 'assistant'
    content: str


@dataclass
class LLMResponse:
    """Response from LLM provider."""

    content: str
    model: str
    tokens_in: int = 0
    tokens_out: int = 0
    finish_reason: str | None = None


@dataclass
class TTSResult:
    """Result from text-to-speech synthesis."""

    audio_data: bytes
    format: str  # 'mp3', 'wav', 'opus'


class GenerationProvider(Protocol):
    """Text-generation collaborator.

    ``chat_stream`` yields text fragments until the stream ends. The stream is
    finite and cannot be restarted; any failure surfaces as a single raised
    error.
    """

    @property
    def provider_name(self) -> str:
        """Get the provider name for logging/metrics."""
        ...

    @property
    def is_configured(self) -> bool:
        """Whether the provider has the credentials it needs."""
        ...

    async def chat(
        self,
        messages: list[LLMMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 1024,
    ) -> LLMResponse:
        """Generate a chat completion."""
        ...

    def chat_stream(
        self,
        messages: list[LLMMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 1024,
    ) -> AsyncIterator[str]:
        """Generate a streaming chat completion."""
        ...


class SpeechSynthesisProvider(Protocol):
    """Text-to-speech collaborator."""

    @property
    def provider_name(self) -> str:
        ...

    @property
    def is_configured(self) -> bool:
        ...

    async def synthesize(self, text: str) -> TTSResult:
        """Synthesize text to speech."""
        ...
