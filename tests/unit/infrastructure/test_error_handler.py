"""Tests for the global error handlers."""

from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from classica.domain.errors import (
    AppError,
    AuthError,
    ConfigurationError,
    EventNotFoundError,
    InvalidStateError,
    SpeechError,
    UpstreamGenerationError,
)
from classica.infrastructure.middleware import (
    RequestContextMiddleware,
    get_status_code,
    register_error_handlers,
)


class Payload(BaseModel):
    count: int


def build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)

    @app.get("/missing")
    async def missing():
        raise EventNotFoundError(message="Event not found", details={"event_id": "abc"})

    @app.get("/misconfigured")
    async def misconfigured():
        raise ConfigurationError(message="OPENAI_API_KEY is not configured", setting="openai_api_key")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("unexpected")

    @app.post("/payload")
    async def payload(body: Payload):
        return {"count": body.count}

    return app


class TestStatusCodes:
    def test_mapping(self):
        assert get_status_code(EventNotFoundError(message="x")) == 404
        assert get_status_code(InvalidStateError(message="x")) == 400
        assert get_status_code(AuthError(message="x")) == 401
        assert get_status_code(UpstreamGenerationError(message="x")) == 502
        assert get_status_code(SpeechError(message="x")) == 502
        assert get_status_code(ConfigurationError(message="x")) == 500
        assert get_status_code(AppError(message="x")) == 500


class TestErrorHandlers:
    """Test error envelopes produced by the handlers."""

    def test_app_error_envelope(self):
        client = TestClient(build_app())

        response = client.get("/missing")

        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "EVENT_NOT_FOUND"
        assert error["message"] == "Event not found"
        assert error["details"] == {"event_id": "abc"}
        assert error["retryable"] is False

    def test_configuration_error_is_generic(self):
        client = TestClient(build_app())

        response = client.get("/misconfigured")

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "CONFIGURATION_ERROR"
        assert "OPENAI_API_KEY" not in error["message"]
        assert error["details"] == {}

    def test_request_validation_is_400(self):
        client = TestClient(build_app())

        response = client.post("/payload", json={"count": "many"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_unhandled_exception(self):
        client = TestClient(build_app(), raise_server_exceptions=False)

        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"

    def test_request_id_echoed(self):
        client = TestClient(build_app())

        response = client.get("/missing", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"
