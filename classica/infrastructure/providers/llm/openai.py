"""OpenAI chat-completions provider implementation."""

import json
import time
from collections.abc import AsyncIterator

import httpx

from classica.config import Settings
from classica.domain.errors import (
    ConfigurationError,
    ProviderRateLimitError,
    ProviderTimeoutError,
    UpstreamGenerationError,
)
from classica.domain.protocols.providers import (
    GenerationProvider,
    LLMMessage,
    LLMResponse,
)
from classica.infrastructure.telemetry import get_logger, record_llm_request

logger = get_logger(__name__)


class OpenAIChatProvider:
    """OpenAI-compatible chat completions over REST, with SSE streaming."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = settings.openai_api_key
        self.default_model = settings.openai_model
        self.base_url = settings.openai_base_url
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=60.0,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _require_key(self) -> None:
        if not self.is_configured:
            raise ConfigurationError(
                message="OPENAI_API_KEY is not configured on the server",
                setting="openai_api_key",
            )

    def _payload(
        self,
        messages: list[LLMMessage],
        model: str,
        temperature: float,
        max_tokens: int,
        stream: bool,
    ) -> dict:
        payload = {
            "model": model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if stream:
            payload["stream"] = True
        return payload

    def _check_status(self, response: httpx.Response, operation: str) -> None:
        if response.status_code == 429:
            raise ProviderRateLimitError(
                message="OpenAI rate limit exceeded",
                provider=self.provider_name,
                operation=operation,
            )
        if response.status_code >= 400:
            raise UpstreamGenerationError(
                message=f"OpenAI request failed with status {response.status_code}",
                provider=self.provider_name,
                operation=operation,
                details={"status_code": response.status_code},
            )

    async def chat(
        self,
        messages: list[LLMMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 1024,
    ) -> LLMResponse:
        """Generate a chat completion."""
        self._require_key()
        model = model or self.default_model
        payload = self._payload(messages, model, temperature, max_tokens, stream=False)

        logger.debug(
            "Calling OpenAI API",
            extra={"model": model, "message_count": len(messages)},
        )

        start = time.perf_counter()
        status = "error"
        try:
            response = await self.client.post("/chat/completions", json=payload)
            self._check_status(response, "chat")
            data = response.json()

            choice = data["choices"][0]
            usage = data.get("usage", {})
            status = "success"

            return LLMResponse(
                content=choice["message"].get("content") or "",
                model=model,
                tokens_in=usage.get("prompt_tokens", 0),
                tokens_out=usage.get("completion_tokens", 0),
                finish_reason=choice.get("finish_reason"),
            )

        except httpx.TimeoutException as e:
            status = "timeout"
            raise ProviderTimeoutError(
                message="OpenAI request timed out",
                provider=self.provider_name,
                operation="chat",
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamGenerationError(
                message=f"OpenAI request failed: {e}",
                provider=self.provider_name,
                operation="chat",
            ) from e
        except (KeyError, IndexError, ValueError) as e:
            raise UpstreamGenerationError(
                message="OpenAI returned a malformed response",
                provider=self.provider_name,
                operation="chat",
            ) from e
        finally:
            record_llm_request(
                provider=self.provider_name,
                model=model,
                operation="chat",
                status=status,
                duration_seconds=time.perf_counter() - start,
            )

    async def chat_stream(
        self,
        messages: list[LLMMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 1024,
    ) -> AsyncIterator[str]:
        """Generate a streaming chat completion, yielding content deltas."""
        self._require_key()
        model = model or self.default_model
        payload = self._payload(messages, model, temperature, max_tokens, stream=True)

        start = time.perf_counter()
        status = "error"
        try:
            async with self.client.stream(
                "POST", "/chat/completions", json=payload
            ) as response:
                self._check_status(response, "chat_stream")

                async for line in response.aiter_lines():
                    if not line or line == "data: [DONE]":
                        continue
                    if not line.startswith("data: "):
                        continue

                    data = json.loads(line[6:])
                    choices = data.get("choices") or []
                    if not choices:
                        continue
                    delta = choices[0].get("delta", {}).get("content")
                    if delta:
                        yield delta

            status = "success"

        except httpx.TimeoutException as e:
            status = "timeout"
            raise ProviderTimeoutError(
                message="OpenAI stream timed out",
                provider=self.provider_name,
                operation="chat_stream",
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamGenerationError(
                message=f"OpenAI stream failed: {e}",
                provider=self.provider_name,
                operation="chat_stream",
            ) from e
        except json.JSONDecodeError as e:
            raise UpstreamGenerationError(
                message="OpenAI stream returned a malformed chunk",
                provider=self.provider_name,
                operation="chat_stream",
            ) from e
        finally:
            record_llm_request(
                provider=self.provider_name,
                model=model,
                operation="chat_stream",
                status=status,
                duration_seconds=time.perf_counter() - start,
            )


# Protocol compliance
_: type[GenerationProvider] = OpenAIChatProvider  # type: ignore
