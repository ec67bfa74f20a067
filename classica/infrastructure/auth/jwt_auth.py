"""Bearer JWT verification against a shared secret."""

from functools import lru_cache
from typing import Any

import jwt

from classica.config import Settings, get_settings
from classica.domain.errors import ConfigurationError, TokenExpiredError, TokenInvalidError
from classica.infrastructure.telemetry import get_logger

logger = get_logger(__name__)


class JWTAuth:
    """Verifies HS256 tokens issued by the upstream identity service."""

    def __init__(self, settings: Settings):
        self.secret = settings.auth_jwt_secret
        self.algorithm = settings.auth_jwt_algorithm
        self.audience = settings.auth_jwt_audience or None

    def verify_token(self, token: str) -> dict[str, Any]:
        """Verify a bearer token and return its claims.

        Raises:
            ConfigurationError: If no signing secret is configured
            TokenExpiredError: If token is expired
            TokenInvalidError: If token is invalid
        """
        if not self.secret:
            raise ConfigurationError(
                message="AUTH_JWT_SECRET is not configured",
                setting="auth_jwt_secret",
            )

        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                options={
                    "verify_signature": True,
                    "verify_exp": True,
                    "verify_aud": self.audience is not None,
                    "require": ["sub"],
                },
            )

            logger.debug("Token verified", extra={"sub": claims.get("sub")})
            return claims

        except jwt.ExpiredSignatureError as e:
            logger.warning("Token expired", extra={"error": str(e)})
            raise TokenExpiredError(
                message="Token has expired",
                details={"error": str(e)},
            ) from e

        except jwt.InvalidAudienceError as e:
            logger.warning("Invalid token audience", extra={"error": str(e)})
            raise TokenInvalidError(
                message="Invalid token audience",
                details={"error": str(e)},
            ) from e

        except jwt.InvalidSignatureError as e:
            logger.warning("Invalid token signature", extra={"error": str(e)})
            raise TokenInvalidError(
                message="Invalid token signature",
                details={"error": str(e)},
            ) from e

        except jwt.DecodeError as e:
            logger.warning("Token decode error", extra={"error": str(e)})
            raise TokenInvalidError(
                message="Invalid token format",
                details={"error": str(e)},
            ) from e

        except jwt.InvalidTokenError as e:
            logger.warning("Token rejected", extra={"error": str(e)})
            raise TokenInvalidError(
                message="Token verification failed",
                details={"error": str(e)},
            ) from e


@lru_cache
def get_jwt_auth() -> JWTAuth:
    """Get cached JWT auth instance."""
    return JWTAuth(get_settings())
