"""Per-entity field descriptor tables.

Update and list queries put column names in identifier position, which
cannot be bound as parameters. Instead of trusting caller supplied keys,
each entity declares the small set of fields it accepts and the column each
one maps to. Anything outside the table is rejected with
InvalidArgumentError before any SQL is built.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from backoffice.core.exceptions import InvalidArgumentError
from backoffice.core.query import ParameterBinder, PaginationOptions


@dataclass(frozen=True)
class FieldSpec:
    """An updatable field: target column plus optional value coercion.

    ``nullable=False`` marks a NOT NULL column; an explicit None for it is
    rejected before any SQL is built.
    """

    column: str
    coerce: Callable[[Any], Any] | None = None
    nullable: bool = True

    def prepare(self, value: Any) -> Any:
        """Apply the coercion, leaving None untouched."""
        if value is None or self.coerce is None:
            return value
        return self.coerce(value)


@dataclass(frozen=True)
class EntityFields:
    """Allow-list of fields for one table.

    Attributes:
        table: Table name.
        updatable: Payload field name to FieldSpec.
        filterable: Filter field name to column name.
        searchable: Text columns the free-text search applies to.
        sortable: Columns a list may be ordered by.
    """

    table: str
    updatable: Mapping[str, FieldSpec]
    filterable: Mapping[str, str] = field(default_factory=dict)
    searchable: tuple[str, ...] = ()
    sortable: frozenset[str] = frozenset({"created_at"})

    def build_assignments(self, patch: Mapping[str, Any], binder: ParameterBinder) -> list[str]:
        """Turn a patch into ``column = $n`` assignments.

        Args:
            patch: Only the fields the caller actually supplied.
            binder: Binder receiving the coerced values.

        Returns:
            SET clause fragments in patch order.

        Raises:
            InvalidArgumentError: If the patch is empty, names an unknown field
                or sets a non-nullable field to None.
        """
        if not patch:
            raise InvalidArgumentError("No data provided for update")

        assignments = []
        for name, value in patch.items():
            field_spec = self.updatable.get(name)
            if field_spec is None:
                raise InvalidArgumentError(f"Invalid field: {name}")
            if value is None and not field_spec.nullable:
                raise InvalidArgumentError(f"Field cannot be null: {name}")
            assignments.append(f"{field_spec.column} = {binder.bind(field_spec.prepare(value))}")
        return assignments

    def resolve_filters(self, filters: Mapping[str, Any] | None) -> dict[str, Any]:
        """Map filter field names to columns, dropping None values.

        Raises:
            InvalidArgumentError: If a filter names a field outside the table.
        """
        resolved: dict[str, Any] = {}
        for name, value in (filters or {}).items():
            column = self.filterable.get(name)
            if column is None:
                raise InvalidArgumentError(f"Invalid filter field: {name}")
            if value is not None:
                resolved[column] = value
        return resolved

    def check_sort(self, options: PaginationOptions | None) -> PaginationOptions:
        """Validate the sort field of pagination options.

        Raises:
            InvalidArgumentError: If the sort field is not sortable.
        """
        options = options or PaginationOptions()
        if options.sort_by is not None and options.sort_by not in self.sortable:
            raise InvalidArgumentError(f"Invalid sort field: {options.sort_by}")
        if options.sort_order is not None and options.sort_order.lower() not in ("asc", "desc"):
            raise InvalidArgumentError(f"Invalid sort order: {options.sort_order}")
        return options
