"""Suppliers repository."""

from backoffice.adapters.entities.base import TableRepository
from backoffice.core.catalog import Supplier
from backoffice.core.fields import EntityFields, FieldSpec

_SUPPLIER_COLUMNS = (
    "name",
    "description",
    "contact_person",
    "email",
    "phone",
    "address",
    "city",
    "country",
    "tax_id",
    "payment_terms",
    "credit_limit",
    "current_balance",
    "status",
    "rating",
    "notes",
)

SUPPLIER_FIELDS = EntityFields(
    table="suppliers",
    updatable={
        column: FieldSpec(column, nullable=column != "name") for column in _SUPPLIER_COLUMNS
    },
    filterable={
        "status": "status",
        "city": "city",
        "country": "country",
        "rating": "rating",
    },
    searchable=("name", "contact_person", "email", "city", "country"),
    sortable=frozenset({"created_at", "updated_at", "name", "rating", "current_balance"}),
)


class SuppliersRepository(TableRepository[Supplier]):
    """Repository for suppliers."""

    fields = SUPPLIER_FIELDS
    model = Supplier
    entity_name = "Supplier"
    insert_columns = _SUPPLIER_COLUMNS
