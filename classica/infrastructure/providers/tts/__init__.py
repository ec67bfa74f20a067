"""TTS provider implementations."""

from classica.infrastructure.providers.tts.elevenlabs import ElevenLabsTTSProvider

__all__ = ["ElevenLabsTTSProvider"]
