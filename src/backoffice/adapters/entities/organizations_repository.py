"""Organizations repository."""

from backoffice.adapters.entities.base import TableRepository
from backoffice.core.auth import Organization
from backoffice.core.fields import EntityFields, FieldSpec

ORGANIZATION_FIELDS = EntityFields(
    table="organizations",
    updatable={
        "name": FieldSpec("name", nullable=False),
        "domain": FieldSpec("domain", nullable=False),
        "address": FieldSpec("address", nullable=False),
    },
    filterable={"domain": "domain"},
    searchable=("name", "domain", "address"),
    sortable=frozenset({"created_at", "updated_at", "name", "domain"}),
)


class OrganizationsRepository(TableRepository[Organization]):
    """Repository for organizations."""

    fields = ORGANIZATION_FIELDS
    model = Organization
    entity_name = "Organization"
    insert_columns = ("name", "domain", "address")
