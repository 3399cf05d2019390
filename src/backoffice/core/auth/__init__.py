"""Auth domain types and utilities."""

from backoffice.core.auth.jwt import (
    TokenError,
    TokenSettings,
    sign_token,
    verify_token,
)
from backoffice.core.auth.password import hash_password, verify_password
from backoffice.core.auth.repository import AuthRepository
from backoffice.core.auth.types import (
    LoginResult,
    Organization,
    TokenClaims,
    User,
    UserProfile,
    UserStatus,
)

__all__ = [
    "User",
    "UserProfile",
    "UserStatus",
    "Organization",
    "TokenClaims",
    "LoginResult",
    "hash_password",
    "verify_password",
    "sign_token",
    "verify_token",
    "TokenError",
    "TokenSettings",
    "AuthRepository",
]
