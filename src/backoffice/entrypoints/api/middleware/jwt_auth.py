"""JWT authentication dependency."""

from dataclasses import dataclass

import structlog
from fastapi import HTTPException, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from backoffice.core.auth.jwt import TokenError, verify_token
from backoffice.entrypoints.api.deps import get_settings

logger = structlog.get_logger()

# Use Bearer token authentication
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class JwtContext:
    """Context from a verified access token."""

    user_id: int
    email: str
    role: int
    organization_id: int | None = None


async def verify_jwt(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),  # noqa: B008
) -> JwtContext:
    """Verify an access token and return its context.

    Args:
        request: The current request.
        credentials: Bearer token credentials.

    Returns:
        JwtContext with user info.

    Raises:
        HTTPException: 401 if token is missing or invalid.
    """
    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Missing authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = verify_token(
            credentials.credentials, get_settings(request).tokens.access_secret
        )
        context = JwtContext(
            user_id=int(payload["id"]),
            email=str(payload["email"]),
            role=int(payload["role"]),
            organization_id=payload.get("organizationId"),
        )
    except (TokenError, KeyError, TypeError, ValueError) as e:
        logger.warning("jwt_validation_failed", reason=str(e))
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    # Store in request state for downstream use
    request.state.user = context
    return context
