"""Users repository."""

from collections.abc import Mapping
from typing import Any

from backoffice.adapters.entities.base import TableRepository
from backoffice.core.auth import UserProfile, hash_password
from backoffice.core.fields import EntityFields, FieldSpec

# Every column except password_hash; user rows never leave the repository
# with the hash attached.
USER_COLUMNS = (
    "id, name, email, username, phone_number, address, organization_id, "
    "image, status, role, created_at, updated_at"
)

USER_FIELDS = EntityFields(
    table="users",
    updatable={
        "name": FieldSpec("name", nullable=False),
        "email": FieldSpec("email", nullable=False),
        "username": FieldSpec("username", nullable=False),
        "phone_number": FieldSpec("phone_number"),
        "address": FieldSpec("address"),
        "organization_id": FieldSpec("organization_id", nullable=False),
        "password": FieldSpec("password_hash", coerce=hash_password, nullable=False),
        "image": FieldSpec("image"),
        "status": FieldSpec("status"),
        "role": FieldSpec("role", nullable=False),
    },
    filterable={
        "status": "status",
        "role": "role",
        "organization_id": "organization_id",
    },
    searchable=("name", "email", "username", "phone_number", "address"),
    sortable=frozenset({"created_at", "updated_at", "name", "email", "username"}),
)


class UsersRepository(TableRepository[UserProfile]):
    """Repository for user profiles.

    Credential reads for login live in PostgresAuthRepository; this one only
    hashes passwords on the way in.
    """

    fields = USER_FIELDS
    model = UserProfile
    entity_name = "User"
    columns = USER_COLUMNS
    insert_columns = (
        "name",
        "email",
        "username",
        "phone_number",
        "address",
        "organization_id",
        "password_hash",
        "image",
        "status",
        "role",
    )

    async def create(self, values: Mapping[str, Any]) -> UserProfile:
        """Create a user, hashing the plain ``password`` value."""
        row = {key: value for key, value in values.items() if key != "password"}
        row["password_hash"] = hash_password(values["password"])
        return await super().create(row)
