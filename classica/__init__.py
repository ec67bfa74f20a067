"""Classica: conversational core for discovering classical-music events."""

__version__ = "0.1.0"
