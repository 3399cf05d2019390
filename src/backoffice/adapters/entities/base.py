"""Shared single-table CRUD for simple entities."""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

import asyncpg
from pydantic import BaseModel

from backoffice.adapters.db.app_db import AppDatabase, translate_database_error
from backoffice.core.exceptions import ConflictError, NotFoundError
from backoffice.core.fields import EntityFields
from backoffice.core.query import (
    DEFAULT_LIMIT,
    Page,
    PaginationOptions,
    ParameterBinder,
    build_list_query,
)

if TYPE_CHECKING:
    from asyncpg import Connection

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class TableRepository(Generic[ModelT]):
    """Create/get/list/update/delete for one table with an ``id`` key.

    Subclasses declare the table through ``fields`` (the allow-list of
    updatable, filterable, searchable and sortable columns), the pydantic
    ``model`` rows map to, and the columns an insert may set.
    """

    fields: ClassVar[EntityFields]
    model: ClassVar[type[BaseModel]]
    entity_name: ClassVar[str]
    insert_columns: ClassVar[tuple[str, ...]]
    columns: ClassVar[str] = "*"

    def __init__(self, db: AppDatabase, default_limit: int = DEFAULT_LIMIT) -> None:
        """Initialize with the application database.

        Args:
            db: Application database instance.
            default_limit: Page size for list calls without an explicit limit.
        """
        self._db = db
        self._default_limit = default_limit

    @property
    def table(self) -> str:
        return self.fields.table

    async def create(self, values: Mapping[str, Any]) -> ModelT:
        """Insert a row inside a transaction and return it.

        Only insertable columns present in ``values`` are written, so
        column defaults apply to the rest.
        """
        binder = ParameterBinder()
        columns = [column for column in self.insert_columns if column in values]
        placeholders = binder.bind_many([values[column] for column in columns])
        query = f"""
            INSERT INTO {self.table} ({", ".join(columns)})
            VALUES ({", ".join(placeholders)})
            RETURNING {self.columns}
        """

        async def work(conn: "Connection") -> dict[str, Any]:
            row = await conn.fetchrow(query, *binder.values)
            return dict(row)

        row = await self._db.run_in_transaction(work, f"create {self.entity_name.lower()}")
        logger.info(f"{self.table}_created: id={row['id']}")
        return self._to_model(row)

    async def get(self, entity_id: int) -> ModelT:
        """Get a row by id.

        Raises:
            NotFoundError: No row has this id.
        """
        row = await self._db.fetch_one(
            f"SELECT {self.columns} FROM {self.table} WHERE id = $1",
            entity_id,
        )
        if not row:
            raise NotFoundError(f"{self.entity_name} not found")
        return self._to_model(row)

    async def list(
        self,
        filters: Mapping[str, Any] | None = None,
        search_term: str | None = None,
        options: PaginationOptions | None = None,
    ) -> Page[ModelT]:
        """List rows matching filters and search term, one page at a time.

        Raises:
            InvalidArgumentError: A filter or the sort field is outside the
                allow-list.
        """
        query = build_list_query(
            self.table,
            filters=self.fields.resolve_filters(filters),
            search_term=search_term,
            search_fields=self.fields.searchable,
            options=self.fields.check_sort(options),
            default_limit=self._default_limit,
            columns=self.columns,
        )
        page = await self._db.fetch_page(query)
        return Page(data=[self._to_model(row) for row in page.data], meta=page.meta)

    async def update(self, entity_id: int, patch: Mapping[str, Any]) -> ModelT:
        """Update the supplied fields and refresh ``updated_at``.

        Raises:
            InvalidArgumentError: Empty patch, unknown field, null for a NOT NULL
                column, or a foreign key, NOT NULL or CHECK violation.
            NotFoundError: No row has this id.
            ConflictError: The update violates a unique constraint.
            InternalError: Any other database failure.
        """
        binder = ParameterBinder()
        assignments = self.fields.build_assignments(patch, binder)
        query = f"""
            UPDATE {self.table}
            SET {", ".join(assignments)}, updated_at = NOW()
            WHERE id = {binder.bind(entity_id)}
            RETURNING {self.columns}
        """
        try:
            row = await self._db.fetch_one(query, *binder.values)
        except asyncpg.UniqueViolationError as e:
            raise ConflictError(f"{self.entity_name} already exists") from e
        except asyncpg.PostgresError as e:
            raise translate_database_error(e, f"update {self.entity_name.lower()}") from e
        if not row:
            raise NotFoundError(f"{self.entity_name} not found")
        return self._to_model(row)

    async def delete(self, entity_id: int) -> ModelT:
        """Delete a row and return it.

        Raises:
            NotFoundError: No row has this id.
        """
        row = await self._db.fetch_one(
            f"DELETE FROM {self.table} WHERE id = $1 RETURNING {self.columns}",
            entity_id,
        )
        if not row:
            raise NotFoundError(f"{self.entity_name} not found")
        logger.info(f"{self.table}_deleted: id={entity_id}")
        return self._to_model(row)

    def _to_model(self, row: Mapping[str, Any]) -> ModelT:
        model: ModelT = self.model.model_validate(dict(row))  # type: ignore[assignment]
        return model
