"""Authentication context for request handling."""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from classica.domain.errors import AuthError, TokenInvalidError
from classica.infrastructure.auth.jwt_auth import JWTAuth, get_jwt_auth
from classica.infrastructure.telemetry import get_logger, user_id_var

logger = get_logger(__name__)

bearer = HTTPBearer(auto_error=False)


@dataclass
class AuthContext:
    """Authenticated user context available in request handlers."""

    user_id: UUID
    email: str = ""
    claims: dict[str, Any] = field(default_factory=dict)


def _context_from_token(token: str, auth: JWTAuth) -> AuthContext:
    claims = auth.verify_token(token)
    try:
        user_id = UUID(str(claims["sub"]))
    except (KeyError, ValueError) as e:
        raise TokenInvalidError(message="Invalid token: subject is not a user id") from e

    user_id_var.set(str(user_id))
    return AuthContext(user_id=user_id, email=claims.get("email", ""), claims=claims)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    auth: JWTAuth = Depends(get_jwt_auth),
) -> AuthContext:
    """FastAPI dependency requiring an authenticated caller."""
    if credentials is None:
        raise AuthError(message="Authentication required")
    return _context_from_token(credentials.credentials, auth)


async def get_optional_auth(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    auth: JWTAuth = Depends(get_jwt_auth),
) -> AuthContext | None:
    """FastAPI dependency to optionally get authenticated user context.

    Returns None if no Authorization header is provided. A token that is
    present but invalid is rejected rather than downgraded to anonymous.
    """
    if credentials is None:
        return None
    return _context_from_token(credentials.credentials, auth)
