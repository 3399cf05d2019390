"""PostgreSQL implementation of AuthRepository."""

from typing import Any

from backoffice.adapters.db.app_db import AppDatabase
from backoffice.core.auth.types import Organization, User


class PostgresAuthRepository:
    """PostgreSQL implementation of auth repository."""

    def __init__(self, db: AppDatabase) -> None:
        """Initialize with database connection.

        Args:
            db: Application database instance.
        """
        self._db = db

    def _row_to_user(self, row: dict[str, Any]) -> User:
        """Convert database row to User model."""
        return User.model_validate(row)

    def _row_to_org(self, row: dict[str, Any]) -> Organization:
        """Convert database row to Organization model."""
        return Organization.model_validate(row)

    async def get_user_by_login(self, identifier: str) -> User | None:
        """Get user whose email or username equals ``identifier``.

        Both columns are UNIQUE, but an email of one user could still equal
        the username of another; the email match wins.
        """
        row = await self._db.fetch_one(
            """
            SELECT * FROM users
            WHERE email = $1 OR username = $1
            ORDER BY (email = $1) DESC
            LIMIT 1
            """,
            identifier,
        )
        return self._row_to_user(row) if row else None

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        row = await self._db.fetch_one(
            "SELECT * FROM users WHERE email = $1",
            email,
        )
        return self._row_to_user(row) if row else None

    async def get_user_by_id(self, user_id: int) -> User | None:
        """Get user by ID."""
        row = await self._db.fetch_one(
            "SELECT * FROM users WHERE id = $1",
            user_id,
        )
        return self._row_to_user(row) if row else None

    async def update_password(self, user_id: int, password_hash: str) -> bool:
        """Store a new password hash and refresh ``updated_at``."""
        result = await self._db.execute(
            "UPDATE users SET password_hash = $1, updated_at = NOW() WHERE id = $2",
            password_hash,
            user_id,
        )
        return result == "UPDATE 1"

    async def get_org_by_domain(self, domain: str) -> Organization | None:
        """Get organization by domain."""
        row = await self._db.fetch_one(
            "SELECT * FROM organizations WHERE domain = $1 LIMIT 1",
            domain,
        )
        return self._row_to_org(row) if row else None
