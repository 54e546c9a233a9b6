from datetime import UTC, datetime, timedelta
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from config import ApplicationConfig


def create_token(claims: Dict[str, Any], expires_delta: timedelta) -> str:
    """
    Sign a JWT with iat/exp added to the given claims

    Args:
        claims: Token-specific claims (sub, permissions, sessionId, ...)
        expires_delta: Token lifetime

    Returns:
        JWT token string
    """
    now = datetime.now(UTC)
    payload = {
        **claims,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid or expired
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=[ApplicationConfig.JWT_ALGORITHM]
        )
        return payload
    except JWTError:
        return None
