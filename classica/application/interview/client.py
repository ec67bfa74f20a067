"""HTTP client for the onboarding endpoints.

Lets an interview engine run out of process against a deployed backend.
"""

import base64
from typing import Any

import httpx

from classica.domain.entities import (
    EXPERIENCE_LEVELS,
    ExperienceLevel,
    QuestionSet,
    Ratings,
    TrackRef,
)
from classica.domain.errors import (
    AppError,
    AuthError,
    ConfigurationError,
    NotFoundError,
    ProviderTimeoutError,
    SpeechError,
    UpstreamGenerationError,
    ValidationError,
)
from classica.infrastructure.telemetry import get_logger

logger = get_logger(__name__)

_ERRORS_BY_STATUS: dict[int, type[AppError]] = {
    400: ValidationError,
    401: AuthError,
    404: NotFoundError,
    502: UpstreamGenerationError,
}


class OnboardingApiClient:
    """OnboardingBackend over the service's JSON API."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, json: Any = None) -> dict[str, Any]:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(
                message="Onboarding service timed out",
                provider="classica",
                operation=path,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamGenerationError(
                message=f"Onboarding service unreachable: {e}",
                provider="classica",
                operation=path,
            ) from e

        if response.status_code >= 400:
            raise self._error_from(response, path)
        return response.json()

    @staticmethod
    def _error_from(response: httpx.Response, path: str) -> AppError:
        try:
            body = response.json().get("error", {})
        except ValueError:
            body = {}

        code = body.get("code", "")
        message = body.get("message") or f"Request failed with status {response.status_code}"
        details = {"status_code": response.status_code, "path": path}

        if code == "SPEECH_ERROR":
            return SpeechError(message=message, provider="classica", operation=path, details=details)
        if code == "CONFIGURATION_ERROR":
            return ConfigurationError(message=message, details=details)

        error_class = _ERRORS_BY_STATUS.get(response.status_code)
        if error_class is None:
            error_class = UpstreamGenerationError if response.status_code >= 500 else AppError
        return error_class(message=message, details=details)

    async def get_questions(self) -> QuestionSet:
        data = await self._request("GET", "/onboarding/questions")
        return QuestionSet(
            questions=tuple(data["questions"]),
            tracks=tuple(
                TrackRef(id=t["id"], file=t["file"], tier=t["tier"]) for t in data["tracks"]
            ),
        )

    async def reply(
        self,
        question_index: int,
        user_answer: str,
        previous_answers: list[str],
    ) -> str:
        data = await self._request(
            "POST",
            "/onboarding/reply",
            json={
                "questionIndex": question_index,
                "userAnswer": user_answer,
                "previousAnswers": previous_answers,
            },
        )
        return data["text"]

    async def speak(self, text: str) -> bytes:
        data = await self._request("POST", "/onboarding/speak", json={"text": text})
        return base64.b64decode(data["audioBase64"])

    async def complete(self, answers: list[str], ratings: Ratings) -> ExperienceLevel:
        data = await self._request(
            "POST",
            "/onboarding/complete",
            json={"answers": answers, "ratings": ratings.to_dict()},
        )
        level = data.get("experienceLevel")
        if level not in EXPERIENCE_LEVELS:
            raise UpstreamGenerationError(
                message="Onboarding service returned an unknown experience level",
                provider="classica",
                operation="/onboarding/complete",
                details={"experience_level": level},
            )
        return level
