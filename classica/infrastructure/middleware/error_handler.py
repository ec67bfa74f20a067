"""Global error handlers mapping AppError to JSON responses."""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from classica.domain.errors import (
    AppError,
    AuthError,
    ConfigurationError,
    NotFoundError,
    ProviderError,
    ValidationError,
)
from classica.infrastructure.telemetry.logging import get_logger

logger = get_logger(__name__)

GENERIC_CONFIGURATION_MESSAGE = "The service is not configured to handle this request"


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Handle all application errors."""
        status_code = get_status_code(exc)

        log_level = "warning" if status_code < 500 else "error"
        getattr(logger, log_level)(
            f"Application error: {exc.message}",
            extra={
                "error_code": exc.code,
                "error_details": exc.details,
                "retryable": exc.retryable,
                "path": request.url.path,
            },
        )

        # Configuration problems are logged in full but not exposed.
        if isinstance(exc, ConfigurationError):
            message, details = GENERIC_CONFIGURATION_MESSAGE, {}
        else:
            message, details = exc.message, exc.details

        return JSONResponse(
            status_code=status_code,
            content={
                "error": {
                    "code": exc.code,
                    "message": message,
                    "details": details,
                    "retryable": exc.retryable,
                }
            },
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report malformed request bodies as validation errors."""
        logger.warning(
            "Request validation failed",
            extra={"path": request.url.path, "error_count": len(exc.errors())},
        )

        return JSONResponse(
            status_code=400,
            content={
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Request validation failed",
                    "details": {"errors": jsonable_encoder(exc.errors())},
                    "retryable": False,
                }
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            f"Unhandled exception: {str(exc)}",
            extra={"path": request.url.path, "error_type": type(exc).__name__},
        )

        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "details": {},
                    "retryable": False,
                }
            },
        )


def get_status_code(error: AppError) -> int:
    """Map error type to HTTP status code."""
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, AuthError):
        return 401
    if isinstance(error, ProviderError):
        return 502
    return 500
