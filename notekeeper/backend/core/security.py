"""
Security Utilities.

Access-token issuance and verification. User accounts live outside this
service; a token's ``sub`` claim carries the integer user id.
"""

from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from notekeeper.backend.core.config import get_app_config, get_settings
from notekeeper.backend.core.exceptions import AuthenticationError
from notekeeper.backend.core.logging import get_logger
from notekeeper.backend.core.utils import utc_now

logger = get_logger(__name__)


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Payload data to encode
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    to_encode = data.copy()

    if expires_delta:
        expire = utc_now() + expires_delta
    else:
        expire = utc_now() + timedelta(minutes=jwt_config.access_token_expire_minutes)

    to_encode.update({"exp": expire, "type": "access", "aud": jwt_config.audience})
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=jwt_config.algorithm)
    return encoded_jwt


def create_user_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    """Create an access token for a user id."""
    return create_access_token({"sub": str(user_id)}, expires_delta=expires_delta)


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Args:
        token: JWT token string

    Returns:
        Decoded token payload

    Raises:
        AuthenticationError: If token is invalid or expired
    """
    settings = get_settings()
    jwt_config = get_app_config().security.jwt
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
        return payload
    except JWTError as e:
        logger.warning("Token decode failed", extra={"error": str(e)})
        raise AuthenticationError("Invalid or expired token")


def user_id_from_token(token: str) -> int:
    """
    Resolve the user id carried by an access token.

    Raises:
        AuthenticationError: If the token is invalid, not an access token,
            or its subject is not an integer
    """
    payload = decode_token(token)

    if payload.get("type") != "access":
        raise AuthenticationError("Invalid token type")

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        logger.warning("Token subject is not a user id")
        raise AuthenticationError("Invalid token subject")
