"""Application layer - prompts, services and the onboarding interview."""
