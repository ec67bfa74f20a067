"""Prometheus metrics configuration."""

from prometheus_client import Counter, Histogram, Info

# Service info
SERVICE_INFO = Info("classica", "Classica backend service information")

# LLM provider metrics
LLM_REQUESTS_TOTAL = Counter(
    "llm_requests_total",
    "Total LLM provider requests",
    ["provider", "model", "operation", "status"],
)

LLM_REQUEST_DURATION_SECONDS = Histogram(
    "llm_request_duration_seconds",
    "LLM request latency in seconds",
    ["provider", "model", "operation"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)

# Chat metrics
CHAT_TURNS_TOTAL = Counter(
    "chat_turns_total",
    "Total committed chat turns",
    ["mode", "role", "persisted"],
)

CHAT_FAILURES_TOTAL = Counter(
    "chat_failures_total",
    "Chat sends that failed during generation",
    ["mode"],
)

# Speech metrics
TTS_REQUESTS_TOTAL = Counter(
    "tts_requests_total",
    "Total speech synthesis requests",
    ["provider", "status"],
)

# Onboarding metrics
ONBOARDING_COMPLETIONS_TOTAL = Counter(
    "onboarding_completions_total",
    "Onboarding results committed to a profile",
    ["experience_level"],
)


def set_service_info(version: str, environment: str) -> None:
    """Set service information metric."""
    SERVICE_INFO.info({"version": version, "environment": environment})


def record_llm_request(
    provider: str,
    model: str,
    operation: str,
    status: str,
    duration_seconds: float,
) -> None:
    """Record an LLM provider call."""
    LLM_REQUESTS_TOTAL.labels(
        provider=provider, model=model, operation=operation, status=status
    ).inc()
    LLM_REQUEST_DURATION_SECONDS.labels(
        provider=provider, model=model, operation=operation
    ).observe(duration_seconds)


def record_chat_turn(mode: str, role: str, persisted: bool) -> None:
    """Record a committed chat turn."""
    CHAT_TURNS_TOTAL.labels(
        mode=mode, role=role, persisted=str(persisted).lower()
    ).inc()


def record_chat_failure(mode: str) -> None:
    """Record a chat send that failed upstream."""
    CHAT_FAILURES_TOTAL.labels(mode=mode).inc()


def record_tts_request(provider: str, status: str) -> None:
    """Record a speech synthesis call."""
    TTS_REQUESTS_TOTAL.labels(provider=provider, status=status).inc()


def record_onboarding_completion(experience_level: str) -> None:
    """Record a committed onboarding result."""
    ONBOARDING_COMPLETIONS_TOTAL.labels(experience_level=experience_level).inc()
