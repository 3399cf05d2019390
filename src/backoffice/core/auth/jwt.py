"""JWT token signing and verification."""

import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt


class TokenError(Exception):
    """Raised when token validation fails."""

    pass


ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60
REFRESH_TOKEN_EXPIRE_DAYS = 7


@dataclass(frozen=True)
class TokenSettings:
    """Secrets and lifetimes for the access/refresh token pair.

    The two tokens are signed with independent secrets, so a refresh token
    can never be replayed as an access token and vice versa.
    """

    access_secret: str
    refresh_secret: str
    access_ttl: timedelta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    refresh_ttl: timedelta = timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS)

    @classmethod
    def from_env(cls) -> "TokenSettings":
        """Load token settings from environment variables."""
        return cls(
            access_secret=os.getenv("JWT_SECRET", "dev-secret-change-in-production"),
            refresh_secret=os.getenv(
                "JWT_REFRESH_SECRET", "dev-refresh-secret-change-in-production"
            ),
            access_ttl=timedelta(
                minutes=int(os.getenv("JWT_EXPIRES_IN_MINUTES", str(ACCESS_TOKEN_EXPIRE_MINUTES)))
            ),
            refresh_ttl=timedelta(
                days=int(os.getenv("JWT_REFRESH_EXPIRES_IN_DAYS", str(REFRESH_TOKEN_EXPIRE_DAYS)))
            ),
        )


def sign_token(claims: dict[str, Any], secret: str, ttl: timedelta) -> str:
    """Sign claims into a JWT that expires after ``ttl``.

    Args:
        claims: Payload claims. ``iat`` and ``exp`` are added here.
        secret: HMAC secret.
        ttl: Token lifetime.

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    payload = {
        **claims,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def verify_token(token: str, secret: str) -> dict[str, Any]:
    """Verify a JWT signature and expiry and return its claims.

    Args:
        token: Encoded JWT string
        secret: HMAC secret the token must have been signed with

    Returns:
        Decoded claims

    Raises:
        TokenError: If token is invalid or expired
    """
    try:
        claims: dict[str, Any] = jwt.decode(token, secret, algorithms=[ALGORITHM])
        return claims
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired") from None
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}") from None
