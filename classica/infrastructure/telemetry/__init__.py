"""Telemetry infrastructure (logging, metrics)."""

from classica.infrastructure.telemetry.logging import (
    ContextLogger,
    clear_request_context,
    configure_logging,
    correlation_context,
    event_id_var,
    get_logger,
    request_id_var,
    session_id_var,
    set_request_context,
    user_id_var,
)
from classica.infrastructure.telemetry.metrics import (
    record_chat_failure,
    record_chat_turn,
    record_llm_request,
    record_onboarding_completion,
    record_tts_request,
    set_service_info,
)

__all__ = [
    # Logging
    "ContextLogger",
    "configure_logging",
    "get_logger",
    "set_request_context",
    "clear_request_context",
    "request_id_var",
    "user_id_var",
    "session_id_var",
    "event_id_var",
    "correlation_context",
    # Metrics
    "set_service_info",
    "record_llm_request",
    "record_chat_turn",
    "record_chat_failure",
    "record_tts_request",
    "record_onboarding_completion",
]
