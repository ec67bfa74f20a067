"""ElevenLabs TTS provider implementation using REST API."""

import time

import httpx

from classica.config import Settings
from classica.domain.errors import ConfigurationError, SpeechError
from classica.domain.protocols.providers import SpeechSynthesisProvider, TTSResult
from classica.infrastructure.telemetry import get_logger, record_tts_request

logger = get_logger(__name__)

ELEVENLABS_BASE_URL = "https://api.elevenlabs.io/v1"
ELEVENLABS_MODEL_ID = "eleven_multilingual_v2"

# Tuned for a friendly, lightly expressive voice
VOICE_SETTINGS = {
    "stability": 0.5,
    "similarity_boost": 0.75,
    "style": 0.4,
}


class ElevenLabsTTSProvider:
    """ElevenLabs text-to-speech returning MP3 audio."""

    def __init__(
        self,
        settings: Settings,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize ElevenLabs TTS provider.

        Args:
            settings: Application settings carrying the API key and voice id
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.api_key = settings.elevenlabs_api_key
        self.voice_id = settings.elevenlabs_voice_id
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def provider_name(self) -> str:
        return "elevenlabs"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=ELEVENLABS_BASE_URL,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def synthesize(self, text: str) -> TTSResult:
        """Synthesize text to MP3 speech.

        Raises:
            ConfigurationError: when no API key is configured
            SpeechError: when the request fails or returns a non-2xx status
        """
        if not self.is_configured:
            raise ConfigurationError(
                message="ELEVENLABS_API_KEY is not configured on the server",
                setting="elevenlabs_api_key",
            )

        payload = {
            "text": text,
            "model_id": ELEVENLABS_MODEL_ID,
            "voice_settings": VOICE_SETTINGS,
        }

        logger.debug(
            "ElevenLabs synthesis request",
            extra={
                "provider": self.provider_name,
                "voice_id": self.voice_id,
                "text_length": len(text),
            },
        )

        start_time = time.perf_counter()
        try:
            response = await self.client.post(
                f"/text-to-speech/{self.voice_id}",
                headers={
                    "xi-api-key": self.api_key,
                    "Content-Type": "application/json",
                    "Accept": "audio/mpeg",
                },
                json=payload,
            )
        except httpx.HTTPError as e:
            record_tts_request(self.provider_name, "error")
            logger.error(
                "ElevenLabs request failed",
                extra={"provider": self.provider_name, "error": str(e)},
            )
            raise SpeechError(
                message="Speech synthesis request failed",
                provider=self.provider_name,
                operation="synthesize",
            ) from e

        if response.status_code >= 400:
            record_tts_request(self.provider_name, "error")
            logger.error(
                "ElevenLabs HTTP error",
                extra={
                    "provider": self.provider_name,
                    "status_code": response.status_code,
                    "error": response.text[:500],
                },
            )
            raise SpeechError(
                message=f"ElevenLabs TTS failed with status {response.status_code}",
                provider=self.provider_name,
                operation="synthesize",
                details={"status_code": response.status_code},
            )

        record_tts_request(self.provider_name, "success")
        logger.info(
            "ElevenLabs synthesis complete",
            extra={
                "provider": self.provider_name,
                "bytes": len(response.content),
                "latency_ms": int((time.perf_counter() - start_time) * 1000),
            },
        )
        return TTSResult(audio_data=response.content, format="mp3")


# Protocol compliance
_: type[SpeechSynthesisProvider] = ElevenLabsTTSProvider  # type: ignore
