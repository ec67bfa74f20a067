"""LLM provider implementations."""

from classica.infrastructure.providers.llm.openai import OpenAIChatProvider

__all__ = ["OpenAIChatProvider"]
