"""Auth repository protocol for database operations."""

from typing import Protocol, runtime_checkable

from backoffice.core.auth.types import Organization, User


@runtime_checkable
class AuthRepository(Protocol):
    """Protocol for auth database operations.

    Implementations provide actual database access (PostgreSQL, etc).
    """

    async def get_user_by_login(self, identifier: str) -> User | None:
        """Get user whose email or username equals ``identifier``."""
        ...

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        ...

    async def get_user_by_id(self, user_id: int) -> User | None:
        """Get user by ID."""
        ...

    async def update_password(self, user_id: int, password_hash: str) -> bool:
        """Store a new password hash. Returns False if no row matched."""
        ...

    async def get_org_by_domain(self, domain: str) -> Organization | None:
        """Get organization by domain."""
        ...
