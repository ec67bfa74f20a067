"""Typed error hierarchy for Classica.

All application errors inherit from AppError and provide:
- code: Machine-readable error code
- message: Human-readable description
- details: Additional context as dict
- retryable: Whether the operation can be retried
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error with full context."""

    code: str = "APP_ERROR"
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)
    retryable: bool = False
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def to_dict(self) -> dict[str, Any]:
        """Serialize error for API responses and logging."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "retryable": self.retryable,
            "timestamp": self.timestamp.isoformat(),
        }


# --- Configuration Errors ---


@dataclass
class ConfigurationError(AppError):
    """A collaborator credential or setting is missing."""

    code: str = "CONFIGURATION_ERROR"
    retryable: bool = False
    setting: str = ""


# --- Not Found Errors ---


@dataclass
class NotFoundError(AppError):
    """Resource not found."""

    code: str = "NOT_FOUND"
    retryable: bool = False


@dataclass
class EventNotFoundError(NotFoundError):
    """Event not found in the catalog."""

    code: str = "EVENT_NOT_FOUND"


@dataclass
class SessionNotFoundError(NotFoundError):
    """Chat session not found."""

    code: str = "SESSION_NOT_FOUND"


# --- Validation Errors ---


@dataclass
class ValidationError(AppError):
    """Input validation failed."""

    code: str = "VALIDATION_ERROR"
    retryable: bool = False


@dataclass
class InvalidStateError(ValidationError):
    """Invalid state transition."""

    code: str = "INVALID_STATE"


# --- Auth Errors ---


@dataclass
class AuthError(AppError):
    """Authentication/authorization failed."""

    code: str = "AUTH_ERROR"
    retryable: bool = False


@dataclass
class TokenExpiredError(AuthError):
    """JWT token has expired."""

    code: str = "TOKEN_EXPIRED"
    retryable: bool = True  # Can retry with fresh token


@dataclass
class TokenInvalidError(AuthError):
    """JWT token is invalid."""

    code: str = "TOKEN_INVALID"


# --- Provider Errors ---


@dataclass
class ProviderError(AppError):
    """External provider failed."""

    code: str = "PROVIDER_ERROR"
    provider: str = ""
    operation: str = ""


@dataclass
class UpstreamGenerationError(ProviderError):
    """The text-generation collaborator failed or could not be reached."""

    code: str = "UPSTREAM_GENERATION_ERROR"
    retryable: bool = True


@dataclass
class ProviderTimeoutError(UpstreamGenerationError):
    """Provider call timed out."""

    code: str = "PROVIDER_TIMEOUT"


@dataclass
class ProviderRateLimitError(UpstreamGenerationError):
    """Provider rate limit exceeded."""

    code: str = "PROVIDER_RATE_LIMITED"
    retry_after_seconds: int = 60


@dataclass
class SpeechError(ProviderError):
    """Speech synthesis or capture failed."""

    code: str = "SPEECH_ERROR"
    retryable: bool = True
