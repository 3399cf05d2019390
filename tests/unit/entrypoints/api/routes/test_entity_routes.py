"""Tests for the user, permission, supplier, tag and organization routes."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import asyncpg
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from backoffice.adapters.entities import UsersRepository
from backoffice.core.auth import Organization, UserProfile
from backoffice.core.catalog import Supplier, Tag
from backoffice.core.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from backoffice.core.query import Page, PageMeta, PaginationOptions
from backoffice.core.rbac import Permission
from backoffice.entrypoints.api.deps import (
    get_organizations_repo,
    get_permissions_repo,
    get_suppliers_repo,
    get_tags_repo,
    get_users_repo,
)
from backoffice.entrypoints.api.errors import register_error_handlers
from backoffice.entrypoints.api.routes import api_router

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def repos() -> dict[str, MagicMock]:
    """Create one mock repository per entity."""
    return {
        name: MagicMock()
        for name in ("users", "permissions", "suppliers", "tags", "organizations")
    }


@pytest.fixture
def client(repos: dict[str, MagicMock]) -> TestClient:
    """Create test client with every router and mocked repositories."""
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(api_router, prefix="/api/v1")
    app.dependency_overrides[get_users_repo] = lambda: repos["users"]
    app.dependency_overrides[get_permissions_repo] = lambda: repos["permissions"]
    app.dependency_overrides[get_suppliers_repo] = lambda: repos["suppliers"]
    app.dependency_overrides[get_tags_repo] = lambda: repos["tags"]
    app.dependency_overrides[get_organizations_repo] = lambda: repos["organizations"]
    return TestClient(app)


def profile() -> UserProfile:
    """Return a user profile."""
    return UserProfile(
        id=1,
        name="Jane Smith",
        email="jane@acme.io",
        username="jane",
        organization_id=3,
        role=2,
        created_at=NOW,
    )


class TestUserRoutes:
    """Tests for /users."""

    def test_list_passes_filters_and_pagination(
        self, client: TestClient, repos: dict[str, MagicMock]
    ) -> None:
        """Query parameters become filters, search term and options."""
        repos["users"].list = AsyncMock(
            return_value=Page(data=[profile()], meta=PageMeta(page=2, limit=5, total=6))
        )

        response = client.get(
            "/api/v1/users",
            params={
                "searchTerm": "smith",
                "status": "active",
                "organizationId": 3,
                "page": 2,
                "limit": 5,
                "sortBy": "name",
                "sortOrder": "asc",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["meta"] == {"page": 2, "limit": 5, "total": 6}
        assert body["data"][0]["username"] == "jane"
        kwargs = repos["users"].list.await_args.kwargs
        assert kwargs["filters"] == {"status": "active", "role": None, "organization_id": 3}
        assert kwargs["search_term"] == "smith"
        assert kwargs["options"] == PaginationOptions(
            page=2, limit=5, sort_by="name", sort_order="asc"
        )

    def test_list_rejects_bad_sort_order(self, client: TestClient) -> None:
        """Only asc and desc are accepted."""
        response = client.get("/api/v1/users", params={"sortOrder": "up"})

        assert response.status_code == 422

    def test_create_sends_plain_password_to_repository(
        self, client: TestClient, repos: dict[str, MagicMock]
    ) -> None:
        """The repository receives the password and hashes it."""
        repos["users"].create = AsyncMock(return_value=profile())

        response = client.post(
            "/api/v1/users",
            json={
                "name": "Jane Smith",
                "email": "jane@acme.io",
                "username": "jane",
                "password": "s3cret-pass",
                "organization_id": 3,
                "role": 2,
            },
        )

        assert response.status_code == 201
        values = repos["users"].create.await_args.args[0]
        assert values["password"] == "s3cret-pass"
        assert values["status"] == "active"
        assert "password" not in response.json()["data"]

    def test_create_rejects_bad_email(self, client: TestClient) -> None:
        """Malformed emails fail validation."""
        response = client.post(
            "/api/v1/users",
            json={
                "name": "n",
                "email": "not-an-email",
                "username": "u",
                "password": "s3cret-pass",
                "organization_id": 3,
                "role": 2,
            },
        )

        assert response.status_code == 422

    def test_update_sends_only_given_fields(
        self, client: TestClient, repos: dict[str, MagicMock]
    ) -> None:
        """Unset fields are not part of the patch."""
        repos["users"].update = AsyncMock(return_value=profile())

        client.patch("/api/v1/users/1", json={"status": "suspended"})

        repos["users"].update.assert_awaited_once_with(1, {"status": "suspended"})

    def test_conflict(self, client: TestClient, repos: dict[str, MagicMock]) -> None:
        """Unique violations surface as 409."""
        repos["users"].update = AsyncMock(side_effect=ConflictError("User already exists"))

        response = client.patch("/api/v1/users/1", json={"email": "taken@acme.io"})

        assert response.status_code == 409

    def test_delete_missing(self, client: TestClient, repos: dict[str, MagicMock]) -> None:
        """Deleting a missing user is 404."""
        repos["users"].delete = AsyncMock(side_effect=NotFoundError("User not found"))

        response = client.delete("/api/v1/users/1")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "User not found"}


class TestUserRoutesOverRepository:
    """User routes over a real repository and a mocked database."""

    @pytest.fixture
    def db(self) -> MagicMock:
        """Return a mocked application database."""
        db = MagicMock()
        db.fetch_one = AsyncMock()
        return db

    @pytest.fixture
    def users_client(self, db: MagicMock) -> TestClient:
        """Create a client whose users repository talks to the mocked database."""
        app = FastAPI()
        register_error_handlers(app)
        app.include_router(api_router, prefix="/api/v1")
        app.dependency_overrides[get_users_repo] = lambda: UsersRepository(db)
        return TestClient(app)

    @pytest.mark.parametrize("field", ["name", "email", "username", "organization_id", "role"])
    def test_null_for_required_field(
        self, users_client: TestClient, db: MagicMock, field: str
    ) -> None:
        """Null for a NOT NULL column is a 400 and no query runs."""
        response = users_client.patch("/api/v1/users/1", json={field: None})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": f"Field cannot be null: {field}",
        }
        db.fetch_one.assert_not_awaited()

    def test_unknown_role_reference(self, users_client: TestClient, db: MagicMock) -> None:
        """A foreign key violation comes back as a 400 envelope."""
        db.fetch_one.side_effect = asyncpg.ForeignKeyViolationError("users_role_fkey")

        response = users_client.patch("/api/v1/users/1", json={"role": 999})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Referenced record does not exist",
        }

    def test_other_database_error(self, users_client: TestClient, db: MagicMock) -> None:
        """Unexpected database failures come back as a 500 envelope."""
        db.fetch_one.side_effect = asyncpg.PostgresError("statement timeout")

        response = users_client.patch("/api/v1/users/1", json={"name": "J"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Failed to update user"}

    def test_overlong_password(self, users_client: TestClient, db: MagicMock) -> None:
        """A password past 72 bytes is a 400, not a bcrypt crash."""
        response = users_client.patch("/api/v1/users/1", json={"password": "p" * 80})

        assert response.status_code == 400
        assert "72 bytes" in response.json()["message"]
        db.fetch_one.assert_not_awaited()


class TestPermissionRoutes:
    """Tests for /permissions."""

    def test_create_and_get(self, client: TestClient, repos: dict[str, MagicMock]) -> None:
        """Create returns 201 and get returns the permission."""
        permission = Permission(id=1, title="tags.read", description="Read tags")
        repos["permissions"].create = AsyncMock(return_value=permission)
        repos["permissions"].get = AsyncMock(return_value=permission)

        created = client.post(
            "/api/v1/permissions", json={"title": "tags.read", "description": "Read tags"}
        )
        fetched = client.get("/api/v1/permissions/1")

        assert created.status_code == 201
        assert fetched.json()["data"]["title"] == "tags.read"
        repos["permissions"].create.assert_awaited_once_with(
            {"title": "tags.read", "description": "Read tags"}
        )

    def test_invalid_sort_field(self, client: TestClient, repos: dict[str, MagicMock]) -> None:
        """Repository validation errors become 400."""
        repos["permissions"].list = AsyncMock(
            side_effect=InvalidArgumentError("Invalid sort field: bogus")
        )

        response = client.get("/api/v1/permissions", params={"sortBy": "bogus"})

        assert response.status_code == 400


class TestSupplierRoutes:
    """Tests for /suppliers."""

    def test_list_filters(self, client: TestClient, repos: dict[str, MagicMock]) -> None:
        """Supplier filters reach the repository."""
        repos["suppliers"].list = AsyncMock(return_value=Page(data=[], meta=PageMeta(1, 10, 0)))

        response = client.get(
            "/api/v1/suppliers", params={"status": "blacklisted", "country": "NO", "rating": 2}
        )

        assert response.status_code == 200
        assert response.json()["meta"]["total"] == 0
        filters = repos["suppliers"].list.await_args.kwargs["filters"]
        assert filters == {"status": "blacklisted", "city": None, "country": "NO", "rating": 2}

    def test_rating_out_of_range(self, client: TestClient) -> None:
        """Ratings are between 1 and 5."""
        response = client.post("/api/v1/suppliers", json={"name": "Acme", "rating": 6})

        assert response.status_code == 422

    def test_delete_returns_supplier(
        self, client: TestClient, repos: dict[str, MagicMock]
    ) -> None:
        """The deleted supplier is echoed back."""
        repos["suppliers"].delete = AsyncMock(return_value=Supplier(id=4, name="Acme"))

        response = client.delete("/api/v1/suppliers/4")

        assert response.json()["data"]["name"] == "Acme"


class TestTagRoutes:
    """Tests for /tags."""

    def test_update(self, client: TestClient, repos: dict[str, MagicMock]) -> None:
        """Only sent fields are patched."""
        repos["tags"].update = AsyncMock(return_value=Tag(id=1, name="vegan"))

        response = client.patch("/api/v1/tags/1", json={"name": "vegan"})

        assert response.status_code == 200
        repos["tags"].update.assert_awaited_once_with(1, {"name": "vegan"})

    def test_search(self, client: TestClient, repos: dict[str, MagicMock]) -> None:
        """The searchTerm query parameter is forwarded."""
        repos["tags"].list = AsyncMock(return_value=Page(data=[], meta=PageMeta(1, 10, 0)))

        client.get("/api/v1/tags", params={"searchTerm": "veg"})

        assert repos["tags"].list.await_args.kwargs["search_term"] == "veg"


class TestOrganizationRoutes:
    """Tests for /organizations."""

    def test_create_requires_domain(self, client: TestClient) -> None:
        """name, domain and address are all required."""
        response = client.post("/api/v1/organizations", json={"name": "Acme", "address": "x"})

        assert response.status_code == 422

    def test_get(self, client: TestClient, repos: dict[str, MagicMock]) -> None:
        """Should return the organization."""
        repos["organizations"].get = AsyncMock(
            return_value=Organization(id=3, name="Acme", domain="acme.io", address="x")
        )

        response = client.get("/api/v1/organizations/3")

        assert response.json()["data"]["domain"] == "acme.io"
