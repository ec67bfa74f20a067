"""Middleware infrastructure."""

from classica.infrastructure.middleware.error_handler import (
    get_status_code,
    register_error_handlers,
)
from classica.infrastructure.middleware.request_context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware", "register_error_handlers", "get_status_code"]
