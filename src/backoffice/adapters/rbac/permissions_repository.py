"""Permissions repository."""

from backoffice.adapters.entities.base import TableRepository
from backoffice.core.fields import EntityFields, FieldSpec
from backoffice.core.rbac import Permission

PERMISSION_FIELDS = EntityFields(
    table="permissions",
    updatable={
        "title": FieldSpec("title", nullable=False),
        "description": FieldSpec("description"),
    },
    filterable={"title": "title"},
    searchable=("title", "description"),
    sortable=frozenset({"created_at", "updated_at", "title"}),
)


class PermissionsRepository(TableRepository[Permission]):
    """Repository for permissions."""

    fields = PERMISSION_FIELDS
    model = Permission
    entity_name = "Permission"
    insert_columns = ("title", "description")
