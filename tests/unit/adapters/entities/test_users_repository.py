"""Tests for UsersRepository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import asyncpg
import pytest

from backoffice.adapters.entities import UsersRepository
from backoffice.core.auth import verify_password
from backoffice.core.exceptions import (
    ConflictError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
)
from backoffice.core.query import Page, PageMeta, PaginationOptions

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def user_row(**overrides: Any) -> dict[str, Any]:
    """Return a users row as the repository selects it."""
    row = {
        "id": 1,
        "name": "Jane Smith",
        "email": "jane@acme.io",
        "username": "jane",
        "phone_number": None,
        "address": None,
        "organization_id": 3,
        "image": None,
        "status": "active",
        "role": 2,
        "created_at": NOW,
        "updated_at": NOW,
    }
    row.update(overrides)
    return row


@pytest.fixture
def mock_conn() -> AsyncMock:
    """Return a mock transaction connection."""
    conn = AsyncMock()
    conn.fetchrow.return_value = user_row()
    return conn


@pytest.fixture
def mock_db(mock_conn: AsyncMock) -> MagicMock:
    """Return a mock database that runs transactional work on mock_conn."""
    db = MagicMock()

    async def run_in_transaction(work: Any, operation: str) -> Any:
        return await work(mock_conn)

    db.run_in_transaction = AsyncMock(side_effect=run_in_transaction)
    db.fetch_one = AsyncMock(return_value=user_row())
    db.fetch_page = AsyncMock(return_value=Page(data=[user_row()], meta=PageMeta(1, 10, 1)))
    return db


@pytest.fixture
def repo(mock_db: MagicMock) -> UsersRepository:
    """Return a users repository."""
    return UsersRepository(mock_db)


class TestUsersRepositoryCreate:
    """Tests for creating users."""

    async def test_hashes_password(self, repo: UsersRepository, mock_conn: AsyncMock) -> None:
        """The plain password is replaced by a bcrypt hash before insert."""
        user = await repo.create(
            {
                "name": "Jane Smith",
                "email": "jane@acme.io",
                "username": "jane",
                "password": "plain-pass",
                "organization_id": 3,
                "role": 2,
                "status": "active",
            }
        )

        query, *params = mock_conn.fetchrow.await_args.args
        assert "password_hash" in query
        assert "plain-pass" not in params
        stored_hash = next(p for p in params if isinstance(p, str) and p.startswith("$2"))
        assert verify_password("plain-pass", stored_hash)
        assert user.email == "jane@acme.io"

    async def test_returning_excludes_hash(
        self, repo: UsersRepository, mock_conn: AsyncMock
    ) -> None:
        """Inserted rows come back without the password hash column."""
        await repo.create(
            {
                "name": "n",
                "email": "e@x.io",
                "username": "u",
                "password": "p4ssword",
                "organization_id": 1,
                "role": 1,
            }
        )

        query = mock_conn.fetchrow.await_args.args[0]
        returning = query.split("RETURNING", 1)[1]
        assert "password_hash" not in returning

    async def test_overlong_password(self, repo: UsersRepository, mock_db: MagicMock) -> None:
        """A password bcrypt cannot take is rejected before any insert."""
        with pytest.raises(InvalidArgumentError, match="72 bytes"):
            await repo.create(
                {
                    "name": "n",
                    "email": "e@x.io",
                    "username": "u",
                    "password": "p" * 73,
                    "organization_id": 1,
                    "role": 1,
                }
            )

        mock_db.run_in_transaction.assert_not_awaited()


class TestUsersRepositoryUpdate:
    """Tests for updating users."""

    async def test_password_update_is_hashed(
        self, repo: UsersRepository, mock_db: MagicMock
    ) -> None:
        """A password in the patch lands in password_hash, hashed."""
        await repo.update(1, {"password": "new-pass"})

        query, *params = mock_db.fetch_one.await_args.args
        assert "password_hash = $1" in query
        assert "updated_at = NOW()" in query
        assert params[0] != "new-pass"
        assert verify_password("new-pass", params[0])
        assert params[1] == 1

    async def test_multiple_fields(self, repo: UsersRepository, mock_db: MagicMock) -> None:
        """Each field gets its own placeholder and the id comes last."""
        mock_db.fetch_one.return_value = user_row(name="J", status="suspended")

        user = await repo.update(1, {"name": "J", "status": "suspended"})

        query, *params = mock_db.fetch_one.await_args.args
        assert "name = $1, status = $2, updated_at = NOW()" in query
        assert "WHERE id = $3" in query
        assert params == ["J", "suspended", 1]
        assert user.status is not None and user.status.value == "suspended"

    async def test_unknown_field(self, repo: UsersRepository, mock_db: MagicMock) -> None:
        """password_hash cannot be set directly."""
        with pytest.raises(InvalidArgumentError, match="Invalid field: password_hash"):
            await repo.update(1, {"password_hash": "x"})

        mock_db.fetch_one.assert_not_awaited()

    async def test_empty_patch(self, repo: UsersRepository) -> None:
        """Nothing to update is an invalid argument."""
        with pytest.raises(InvalidArgumentError, match="No data provided for update"):
            await repo.update(1, {})

    async def test_missing_user(self, repo: UsersRepository, mock_db: MagicMock) -> None:
        """No row updated means NotFoundError."""
        mock_db.fetch_one.return_value = None

        with pytest.raises(NotFoundError, match="User not found"):
            await repo.update(1, {"name": "x"})

    async def test_unknown_role_reference(self, repo: UsersRepository, mock_db: MagicMock) -> None:
        """A foreign key violation is an invalid argument."""
        mock_db.fetch_one.side_effect = asyncpg.ForeignKeyViolationError("users_role_fkey")

        with pytest.raises(InvalidArgumentError, match="Referenced record does not exist"):
            await repo.update(1, {"role": 999})

    async def test_duplicate_email(self, repo: UsersRepository, mock_db: MagicMock) -> None:
        """A unique violation is a conflict."""
        mock_db.fetch_one.side_effect = asyncpg.UniqueViolationError("users_email_key")

        with pytest.raises(ConflictError, match="User already exists"):
            await repo.update(1, {"email": "taken@acme.io"})

    async def test_column_constraint(self, repo: UsersRepository, mock_db: MagicMock) -> None:
        """NOT NULL and CHECK violations are invalid arguments."""
        mock_db.fetch_one.side_effect = asyncpg.CheckViolationError("users_status_check")

        with pytest.raises(InvalidArgumentError, match="column constraint"):
            await repo.update(1, {"status": "archived"})

    async def test_other_database_error(self, repo: UsersRepository, mock_db: MagicMock) -> None:
        """Any other database failure is an internal error chained to its cause."""
        cause = asyncpg.PostgresError("canceling statement due to statement timeout")
        mock_db.fetch_one.side_effect = cause

        with pytest.raises(InternalError, match="Failed to update user") as exc_info:
            await repo.update(1, {"name": "x"})

        assert exc_info.value.__cause__ is cause

    @pytest.mark.parametrize("field", ["name", "email", "username", "organization_id", "role"])
    async def test_null_for_required_column(
        self, repo: UsersRepository, mock_db: MagicMock, field: str
    ) -> None:
        """An explicit None for a NOT NULL column never reaches the database."""
        with pytest.raises(InvalidArgumentError, match=f"Field cannot be null: {field}"):
            await repo.update(1, {field: None})

        mock_db.fetch_one.assert_not_awaited()

    async def test_null_for_optional_column(
        self, repo: UsersRepository, mock_db: MagicMock
    ) -> None:
        """Nullable columns can be cleared."""
        await repo.update(1, {"phone_number": None})

        assert mock_db.fetch_one.await_args.args[1:] == (None, 1)


class TestUsersRepositoryRead:
    """Tests for get, list and delete."""

    async def test_get_selects_public_columns(
        self, repo: UsersRepository, mock_db: MagicMock
    ) -> None:
        """The hash column is never selected."""
        user = await repo.get(1)

        query = mock_db.fetch_one.await_args.args[0]
        assert "password_hash" not in query
        assert "SELECT *" not in query
        assert user.id == 1

    async def test_list_filters_and_search(
        self, repo: UsersRepository, mock_db: MagicMock
    ) -> None:
        """Filters, search and pagination reach the query plan."""
        page = await repo.list(
            filters={"status": "active", "role": None, "organization_id": 3},
            search_term="smith",
            options=PaginationOptions(page=2, limit=5, sort_by="name", sort_order="asc"),
        )

        query = mock_db.fetch_page.await_args.args[0]
        assert (
            "(name ILIKE $1 OR email ILIKE $1 OR username ILIKE $1"
            " OR phone_number ILIKE $1 OR address ILIKE $1)"
        ) in query.data_sql
        assert "status = $2 AND organization_id = $3" in query.data_sql
        assert "ORDER BY name ASC LIMIT $4 OFFSET $5" in query.data_sql
        assert query.params == ["%smith%", "active", 3, 5, 5]
        assert page.meta.total == 1
        assert page.data[0].username == "jane"

    async def test_list_unknown_filter(self, repo: UsersRepository) -> None:
        """Unknown filters are refused."""
        with pytest.raises(InvalidArgumentError, match="Invalid filter field"):
            await repo.list(filters={"password_hash": "x"})

    async def test_delete_missing(self, repo: UsersRepository, mock_db: MagicMock) -> None:
        """Deleting a missing user raises NotFoundError."""
        mock_db.fetch_one.return_value = None

        with pytest.raises(NotFoundError):
            await repo.delete(9)
