"""Tests for the onboarding service."""

import random
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from classica.application.services.onboarding import OnboardingService
from classica.domain.entities import Ratings
from classica.domain.errors import (
    ConfigurationError,
    SpeechError,
    UpstreamGenerationError,
    ValidationError,
)
from classica.domain.protocols import TTSResult


@pytest.fixture
def tts():
    provider = MagicMock()
    provider.provider_name = "elevenlabs"
    provider.is_configured = True
    provider.synthesize = AsyncMock(return_value=TTSResult(audio_data=b"ID3", format="mp3"))
    return provider


@pytest.fixture
def service(fake_llm, tts, settings, boundary):
    return OnboardingService(fake_llm, tts, settings, boundary=boundary, rng=random.Random(3))


class TestGetQuestions:
    def test_one_question_three_tiers(self, service):
        question_set = service.get_questions()

        assert question_set.questions == ("What kind of music do you like?",)
        assert [t.tier for t in question_set.tracks] == ["easy", "medium", "hard"]


class TestReply:
    @pytest.mark.asyncio
    async def test_reply_uses_short_warm_settings(self, service, fake_llm):
        text = await service.reply(0, "Mostly film scores", [])

        assert text == "What a lovely choice!"
        call = fake_llm.calls[-1]
        assert call["temperature"] == 0.8
        assert call["max_tokens"] == 150
        assert call["messages"][2].content == "Mostly film scores"

    @pytest.mark.asyncio
    async def test_index_out_of_range(self, service, fake_llm):
        with pytest.raises(ValidationError):
            await service.reply(1, "jazz", [])

        assert fake_llm.calls == []

    @pytest.mark.asyncio
    async def test_unconfigured(self, service, fake_llm):
        fake_llm.is_configured = False

        with pytest.raises(ConfigurationError):
            await service.reply(0, "jazz", [])

    @pytest.mark.asyncio
    async def test_unexpected_failure_wrapped(self, service, fake_llm):
        fake_llm.error = RuntimeError("boom")

        with pytest.raises(UpstreamGenerationError):
            await service.reply(0, "jazz", [])


class TestSpeak:
    @pytest.mark.asyncio
    async def test_returns_audio(self, service, tts):
        audio = await service.speak("Hello")

        assert audio == b"ID3"
        tts.synthesize.assert_awaited_once_with("Hello")

    @pytest.mark.asyncio
    async def test_unconfigured(self, service, tts):
        tts.is_configured = False

        with pytest.raises(ConfigurationError):
            await service.speak("Hello")

    @pytest.mark.asyncio
    async def test_failure_wrapped(self, service, tts):
        tts.synthesize.side_effect = OSError("socket closed")

        with pytest.raises(SpeechError):
            await service.speak("Hello")


class TestComplete:
    @pytest.mark.asyncio
    async def test_scores_and_saves(self, service, boundary):
        user_id = uuid4()

        level = await service.complete(user_id, ["I love the symphony"], Ratings(easy=8, medium=8, hard=8))

        assert level == "enthusiast"
        profile = boundary.profiles.rows[user_id]
        assert profile.experience_level == "enthusiast"
        assert profile.music_taste_easy == 8

    @pytest.mark.asyncio
    async def test_empty_answers(self, service):
        with pytest.raises(ValidationError):
            await service.complete(uuid4(), [], Ratings())

    @pytest.mark.asyncio
    async def test_needs_boundary(self, fake_llm, tts, settings):
        service = OnboardingService(fake_llm, tts, settings)

        with pytest.raises(RuntimeError):
            await service.complete(uuid4(), ["pop"], Ratings())
