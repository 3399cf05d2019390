"""Tags repository."""

from backoffice.adapters.entities.base import TableRepository
from backoffice.core.catalog import Tag
from backoffice.core.fields import EntityFields, FieldSpec

TAG_FIELDS = EntityFields(
    table="tags",
    updatable={
        "name": FieldSpec("name", nullable=False),
        "description": FieldSpec("description"),
    },
    filterable={"name": "name"},
    searchable=("name",),
    sortable=frozenset({"created_at", "updated_at", "name"}),
)


class TagsRepository(TableRepository[Tag]):
    """Repository for tags."""

    fields = TAG_FIELDS
    model = Tag
    entity_name = "Tag"
    insert_columns = ("name", "description")
