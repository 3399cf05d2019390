"""Application database adapter using asyncpg."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any, TypeVar

import asyncpg
import structlog

from backoffice.core.exceptions import (
    BackofficeError,
    ConflictError,
    InternalError,
    InvalidArgumentError,
)
from backoffice.core.query import ListQuery, Page, PageMeta

logger = structlog.get_logger()

T = TypeVar("T")


def translate_database_error(error: Exception, operation: str) -> BackofficeError:
    """Map a failed statement onto a domain error kind.

    Unique violations become ConflictError. Foreign key, NOT NULL and CHECK
    violations become InvalidArgumentError. Anything else is logged with its
    traceback and becomes InternalError. Callers raise the result ``from``
    the original error. Must be called from inside the ``except`` block.

    Args:
        error: The exception raised by the driver or the unit of work.
        operation: Short description, e.g. ``"update user"``.
    """
    if isinstance(error, asyncpg.UniqueViolationError):
        logger.info("constraint_conflict", operation=operation, detail=str(error))
        return ConflictError("Record already exists")
    if isinstance(error, asyncpg.ForeignKeyViolationError):
        logger.info("constraint_invalid_reference", operation=operation, detail=str(error))
        return InvalidArgumentError("Referenced record does not exist")
    if isinstance(error, asyncpg.NotNullViolationError | asyncpg.CheckViolationError):
        logger.info("constraint_invalid_value", operation=operation, detail=str(error))
        return InvalidArgumentError("Value violates a column constraint")
    logger.exception("database_operation_failed", operation=operation)
    return InternalError(f"Failed to {operation}")


class AppDatabase:
    """Storage capability handed to every repository.

    Wraps one asyncpg pool. Nothing else holds a connection or a pool, so
    tests can substitute the pool (or the whole object) freely.
    """

    def __init__(self, dsn: str, min_size: int = 2, max_size: int = 10):
        """Initialize the app database adapter."""
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self.pool: asyncpg.Pool[asyncpg.Record] | None = None

    async def connect(self) -> None:
        """Create connection pool."""
        self.pool = await asyncpg.create_pool(
            self.dsn,
            min_size=self.min_size,
            max_size=self.max_size,
            command_timeout=60,
        )
        logger.info("app_database_connected", dsn=self.dsn.split("@")[-1])

    async def close(self) -> None:
        """Close connection pool."""
        if self.pool:
            await self.pool.close()
            logger.info("app_database_disconnected")

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection[asyncpg.Record]]:
        """Acquire a connection from the pool, releasing it on every path."""
        if self.pool is None:
            raise RuntimeError("Database pool not initialized")
        async with self.pool.acquire() as conn:
            yield conn

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[asyncpg.Connection[asyncpg.Record]]:
        """Acquire a dedicated connection and run a transaction on it.

        Commits when the block exits normally and rolls back when it raises.
        The connection goes back to the pool either way.
        """
        async with self.acquire() as conn:
            async with conn.transaction():
                yield conn

    async def run_in_transaction(
        self,
        work: Callable[[asyncpg.Connection[asyncpg.Record]], Awaitable[T]],
        operation: str,
    ) -> T:
        """Run a unit of work inside one transaction.

        On normal return the transaction commits and the work's result is
        returned. On any exception it rolls back first. BackofficeError
        subclasses are then re-raised unchanged and anything else goes
        through ``translate_database_error``. Callers never see a committed
        partial state paired with an error.

        Args:
            work: Coroutine function receiving the transaction's connection.
            operation: Short description used in logs and error messages,
                e.g. ``"update role"``.

        Returns:
            Whatever ``work`` returned.
        """
        try:
            async with self.transaction() as conn:
                return await work(conn)
        except BackofficeError:
            raise
        except Exception as e:
            raise translate_database_error(e, operation) from e

    async def fetch_one(self, query: str, *args: Any) -> dict[str, Any] | None:
        """Fetch a single row."""
        async with self.acquire() as conn:
            row = await conn.fetchrow(query, *args)
            if row:
                return dict(row)
            return None

    async def fetch_all(self, query: str, *args: Any) -> list[dict[str, Any]]:
        """Fetch all rows."""
        async with self.acquire() as conn:
            rows = await conn.fetch(query, *args)
            return [dict(row) for row in rows]

    async def fetch_val(self, query: str, *args: Any) -> Any:
        """Fetch the first column of the first row."""
        async with self.acquire() as conn:
            return await conn.fetchval(query, *args)

    async def execute(self, query: str, *args: Any) -> str:
        """Execute a query and return status."""
        async with self.acquire() as conn:
            result: str = await conn.execute(query, *args)
            return result

    async def fetch_page(self, query: ListQuery) -> Page[dict[str, Any]]:
        """Run a list query plan and its count query on one connection.

        Args:
            query: Plan from ``build_list_query``.

        Returns:
            Rows of the requested page plus ``{page, limit, total}``.
        """
        async with self.acquire() as conn:
            rows = await conn.fetch(query.data_sql, *query.params)
            total = await conn.fetchval(query.count_sql, *query.count_params)

        return Page(
            data=[dict(row) for row in rows],
            meta=PageMeta(page=query.page, limit=query.limit, total=int(total or 0)),
        )
