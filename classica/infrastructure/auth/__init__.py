"""Authentication infrastructure - bearer JWT verification."""

from classica.infrastructure.auth.context import (
    AuthContext,
    get_current_user,
    get_optional_auth,
)
from classica.infrastructure.auth.jwt_auth import JWTAuth, get_jwt_auth

__all__ = [
    "AuthContext",
    "get_current_user",
    "get_optional_auth",
    "JWTAuth",
    "get_jwt_auth",
]
