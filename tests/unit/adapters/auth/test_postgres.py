"""Tests for PostgresAuthRepository."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from backoffice.adapters.auth import PostgresAuthRepository
from backoffice.core.auth import AuthRepository, UserStatus


def stored_user(**overrides: Any) -> dict[str, Any]:
    """Return a full users row including the hash."""
    row = {
        "id": 7,
        "name": "Jane Smith",
        "email": "jane@acme.io",
        "username": "jane",
        "phone_number": None,
        "address": None,
        "organization_id": 3,
        "password_hash": "$2b$04$abcdefghijklmnopqrstuv",
        "image": None,
        "status": "suspended",
        "role": 2,
    }
    row.update(overrides)
    return row


@pytest.fixture
def mock_db() -> MagicMock:
    """Return a mock database."""
    db = MagicMock()
    db.fetch_one = AsyncMock(return_value=stored_user())
    db.execute = AsyncMock(return_value="UPDATE 1")
    return db


@pytest.fixture
def repo(mock_db: MagicMock) -> PostgresAuthRepository:
    """Return the repository under test."""
    return PostgresAuthRepository(mock_db)


class TestPostgresAuthRepository:
    """Tests for PostgresAuthRepository."""

    def test_satisfies_protocol(self, repo: PostgresAuthRepository) -> None:
        """The adapter implements the AuthRepository protocol."""
        assert isinstance(repo, AuthRepository)

    async def test_login_lookup_matches_email_or_username(
        self, repo: PostgresAuthRepository, mock_db: MagicMock
    ) -> None:
        """One parameter is compared to both columns and email wins ties."""
        user = await repo.get_user_by_login("jane")

        query, identifier = mock_db.fetch_one.await_args.args
        assert "email = $1 OR username = $1" in query
        assert "ORDER BY (email = $1) DESC" in query
        assert identifier == "jane"
        assert user is not None
        assert user.status is UserStatus.SUSPENDED
        assert user.password_hash.startswith("$2b$")

    async def test_lookup_miss(self, repo: PostgresAuthRepository, mock_db: MagicMock) -> None:
        """No row means None."""
        mock_db.fetch_one.return_value = None

        assert await repo.get_user_by_email("ghost@acme.io") is None
        assert await repo.get_user_by_id(99) is None
        assert await repo.get_org_by_domain("ghost.io") is None

    async def test_update_password(self, repo: PostgresAuthRepository, mock_db: MagicMock) -> None:
        """The hash is stored and updated_at refreshed."""
        assert await repo.update_password(7, "new-hash") is True

        query, *params = mock_db.execute.await_args.args
        assert "password_hash = $1, updated_at = NOW()" in query
        assert params == ["new-hash", 7]

    async def test_update_password_no_row(
        self, repo: PostgresAuthRepository, mock_db: MagicMock
    ) -> None:
        """Zero updated rows reports False."""
        mock_db.execute.return_value = "UPDATE 0"

        assert await repo.update_password(7, "new-hash") is False

    async def test_org_by_domain(self, repo: PostgresAuthRepository, mock_db: MagicMock) -> None:
        """Organizations are resolved by domain."""
        mock_db.fetch_one.return_value = {
            "id": 3,
            "name": "Acme",
            "domain": "acme.io",
            "address": "1 Main St",
        }

        organization = await repo.get_org_by_domain("acme.io")

        assert organization is not None
        assert organization.id == 3
        assert mock_db.fetch_one.await_args.args[1] == "acme.io"
