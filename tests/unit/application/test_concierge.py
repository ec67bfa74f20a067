"""Tests for beginner notes."""

from uuid import uuid4

import pytest

from classica.application.services.concierge import BEGINNER_NOTES_MAX_TOKENS, ConciergeService
from classica.domain.errors import ConfigurationError, EventNotFoundError


class TestConciergeService:
    @pytest.mark.asyncio
    async def test_generates_notes(self, boundary, fake_llm, sample_event):
        service = ConciergeService(boundary, fake_llm)

        notes = await service.generate_beginner_notes(sample_event.id)

        assert notes == "What a lovely choice!"
        assert fake_llm.calls[-1]["max_tokens"] == BEGINNER_NOTES_MAX_TOKENS
        assert "Beethoven's Fifth" in fake_llm.calls[-1]["messages"][1].content

    @pytest.mark.asyncio
    async def test_unknown_event(self, boundary, fake_llm):
        with pytest.raises(EventNotFoundError):
            await ConciergeService(boundary, fake_llm).generate_beginner_notes(uuid4())

    @pytest.mark.asyncio
    async def test_unconfigured(self, boundary, fake_llm, sample_event):
        fake_llm.is_configured = False

        with pytest.raises(ConfigurationError):
            await ConciergeService(boundary, fake_llm).generate_beginner_notes(sample_event.id)
