"""Structured logging with correlation context.

Every record is stamped with whatever correlation ids are bound in the
current context: the HTTP request, the caller, the chat session and, for
learning-mode chat, the event being discussed.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_var: ContextVar[str | None] = ContextVar("user_id", default=None)
session_id_var: ContextVar[str | None] = ContextVar("session_id", default=None)
event_id_var: ContextVar[str | None] = ContextVar("event_id", default=None)

# (log field, short label for text output, context var)
CORRELATION_FIELDS: tuple[tuple[str, str, ContextVar[str | None]], ...] = (
    ("request_id", "req", request_id_var),
    ("user_id", "user", user_id_var),
    ("session_id", "session", session_id_var),
    ("event_id", "event", event_id_var),
)

NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore")

_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


def set_request_context(**ids: str | None) -> None:
    """Bind correlation ids (``request_id``, ``user_id``, ``session_id``, ``event_id``)."""
    known = {name: var for name, _, var in CORRELATION_FIELDS}
    for name, value in ids.items():
        if name not in known:
            raise TypeError(f"Unknown correlation field: {name}")
        if value is not None:
            known[name].set(value)


def clear_request_context() -> None:
    for _, _, var in CORRELATION_FIELDS:
        var.set(None)


def correlation_context() -> dict[str, str]:
    """Correlation ids bound in the current context."""
    return {name: value for name, _, var in CORRELATION_FIELDS if (value := var.get())}


def _record_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }


class StructuredFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
            **correlation_context(),
        }

        if record.exc_info:
            log_data["exc_info"] = self.formatException(record.exc_info)

        log_data.update(
            {k: v for k, v in _record_extras(record).items() if v is not None}
        )
        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable single-line format for development."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")

        context = [
            f"{label}={value[:8]}"
            for _, label, var in CORRELATION_FIELDS
            if (value := var.get())
        ]
        context_str = f" [{', '.join(context)}]" if context else ""

        line = f"{timestamp} | {record.levelname:8} | {record.name}{context_str} | {record.getMessage()}"

        extras = _record_extras(record)
        if extras:
            line += " | " + " ".join(f"{k}={v}" for k, v in extras.items())

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that merges bound fields into ``extra``."""

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        if self.extra:
            extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs


def configure_logging(
    level: str = "INFO",
    format_type: str = "json",
) -> None:
    """Install a single stdout handler on the root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format_type: Output format ('json' or 'text')
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter() if format_type == "json" else TextFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper()))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    # SQL echo only when debugging
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if level == "DEBUG" else logging.WARNING
    )


def get_logger(name: str, **extra: Any) -> ContextLogger:
    """Get a context-aware logger.

    Args:
        name: Logger name (usually __name__)
        **extra: Fields included in every message from this logger
    """
    return ContextLogger(logging.getLogger(name), extra)
