"""Tests for bearer JWT verification."""

import time
from uuid import uuid4

import jwt
import pytest

from classica.domain.errors import ConfigurationError, TokenExpiredError, TokenInvalidError
from classica.infrastructure.auth import JWTAuth

SECRET = "test-jwt-secret-with-at-least-32-bytes"


def make_token(secret=SECRET, **claims):
    payload = {"sub": str(uuid4()), "exp": int(time.time()) + 3600}
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


class TestJWTAuth:
    """Test JWTAuth.verify_token."""

    def test_valid_token(self, settings):
        user_id = str(uuid4())

        claims = JWTAuth(settings).verify_token(make_token(sub=user_id))

        assert claims["sub"] == user_id

    def test_expired_token(self, settings):
        token = make_token(exp=int(time.time()) - 60)

        with pytest.raises(TokenExpiredError):
            JWTAuth(settings).verify_token(token)

    def test_wrong_secret(self, settings):
        with pytest.raises(TokenInvalidError):
            JWTAuth(settings).verify_token(make_token(secret="another-secret-of-enough-length"))

    def test_garbage_token(self, settings):
        with pytest.raises(TokenInvalidError):
            JWTAuth(settings).verify_token("not-a-jwt")

    def test_missing_subject(self, settings):
        token = jwt.encode({"exp": int(time.time()) + 60}, SECRET, algorithm="HS256")

        with pytest.raises(TokenInvalidError):
            JWTAuth(settings).verify_token(token)

    def test_audience_checked_when_configured(self, settings):
        auth = JWTAuth(settings.model_copy(update={"auth_jwt_audience": "classica"}))

        assert auth.verify_token(make_token(aud="classica"))["aud"] == "classica"
        with pytest.raises(TokenInvalidError):
            auth.verify_token(make_token(aud="someone-else"))

    def test_secret_required(self, settings):
        auth = JWTAuth(settings.model_copy(update={"auth_jwt_secret": ""}))

        with pytest.raises(ConfigurationError):
            auth.verify_token(make_token())
