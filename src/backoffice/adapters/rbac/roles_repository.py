"""Roles repository.

A role owns its rows in ``role_permissions``. Every write that touches
those rows runs in one transaction together with the role row itself, and
a permission-set update always deletes the old rows and inserts the full
new set (replace semantics, never an incremental diff).

Concurrent permission-set updates of the same role are serialized by the
row lock the UPDATE (or ``SELECT ... FOR UPDATE``) takes on the role, and
the last one to commit wins. There is no optimistic version check.
"""

import json
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import asyncpg
import structlog

from backoffice.adapters.db.app_db import AppDatabase
from backoffice.core.exceptions import InvalidArgumentError, NotFoundError
from backoffice.core.fields import EntityFields, FieldSpec
from backoffice.core.query import ParameterBinder
from backoffice.core.rbac import PermissionSummary, Role, RoleUpdate

if TYPE_CHECKING:
    from asyncpg import Connection

logger = structlog.get_logger()

ROLE_FIELDS = EntityFields(
    table="roles",
    updatable={
        "title": FieldSpec("title", nullable=False),
        "description": FieldSpec("description"),
    },
)

_ROLE_WITH_PERMISSIONS = """
    SELECT r.*,
        json_agg(
            json_build_object('id', p.id, 'title', p.title, 'description', p.description)
        ) AS permissions
    FROM roles r
    LEFT JOIN role_permissions rp ON r.id = rp.role_id
    LEFT JOIN permissions p ON rp.permission_id = p.id
"""


def aggregate_permissions(raw: Any) -> list[PermissionSummary]:
    """Turn a ``json_agg`` permissions column into permission objects.

    ``roles LEFT JOIN role_permissions LEFT JOIN permissions`` yields one row
    with all-NULL permission columns for a role that has no permissions, so
    the aggregate for such a role is ``[{"id": null, ...}]`` rather than an
    empty array. Elements with a null id are that placeholder and are
    dropped; they never count as a permission.

    Args:
        raw: The aggregate as returned by asyncpg (a JSON string) or an
            already decoded list.

    Returns:
        Permissions in aggregation order.
    """
    if raw is None:
        return []
    items = json.loads(raw) if isinstance(raw, str | bytes) else raw
    return [PermissionSummary(**item) for item in items if item.get("id") is not None]


def unique_ids(ids: Iterable[int]) -> list[int]:
    """Drop repeated ids, keeping the first occurrence of each."""
    return list(dict.fromkeys(ids))


class RolesRepository:
    """Repository for roles and their permission sets."""

    def __init__(self, db: AppDatabase) -> None:
        """Initialize with the application database.

        Args:
            db: Application database instance.
        """
        self._db = db

    async def create_role_with_permissions(
        self,
        title: str,
        description: str | None = None,
        permission_ids: list[int] | None = None,
    ) -> Role:
        """Create a role and its permission rows atomically.

        Repeated permission ids are collapsed into one join row.

        Args:
            title: Role title.
            description: Optional description.
            permission_ids: Permissions granted to the new role.

        Returns:
            The committed role, read back with its permissions.
        """
        ids = unique_ids(permission_ids or [])

        async def work(conn: "Connection") -> int:
            row = await conn.fetchrow(
                """
                INSERT INTO roles (title, description)
                VALUES ($1, $2)
                RETURNING id
                """,
                title,
                description,
            )
            role_id: int = row["id"]
            await self._insert_permissions(conn, role_id, ids)
            return role_id

        role_id = await self._db.run_in_transaction(work, "create role")
        logger.info("role_created", role_id=role_id, permission_count=len(ids))
        return await self.get_role_with_permissions(role_id)

    async def update_role_with_permissions(self, role_id: int, patch: RoleUpdate) -> Role:
        """Update a role's columns and/or replace its permission set.

        Title and description are updated only if the patch sets them. The
        permission set is replaced only if the patch explicitly carries
        ``permission_ids``; an explicit empty list clears it.

        Args:
            role_id: Role to update.
            patch: Fields to change.

        Returns:
            The role as committed, re-read after the transaction.

        Raises:
            InvalidArgumentError: The patch sets nothing, sets the title to
                None, or names an unknown permission id.
            NotFoundError: The role does not exist, or was deleted between
                commit and re-read.
        """
        changes = patch.column_changes()
        if not changes and not patch.replaces_permissions:
            raise InvalidArgumentError("No data provided for update")

        binder = ParameterBinder()
        assignments = ROLE_FIELDS.build_assignments(changes, binder) if changes else []

        async def work(conn: "Connection") -> None:
            if changes:
                row = await conn.fetchrow(
                    f"""
                    UPDATE roles
                    SET {", ".join(assignments)}, updated_at = NOW()
                    WHERE id = {binder.bind(role_id)}
                    RETURNING id
                    """,
                    *binder.values,
                )
            else:
                row = await conn.fetchrow(
                    "SELECT id FROM roles WHERE id = $1 FOR UPDATE",
                    role_id,
                )
            if row is None:
                raise NotFoundError("Role not found")

            if patch.replaces_permissions:
                ids = unique_ids(patch.permission_ids or [])
                await conn.execute("DELETE FROM role_permissions WHERE role_id = $1", role_id)
                await self._insert_permissions(conn, role_id, ids)
                logger.info("role_permissions_replaced", role_id=role_id, permission_count=len(ids))

        await self._db.run_in_transaction(work, "update role")

        role = await self._fetch_role(role_id)
        if role is None:
            raise NotFoundError("Role not found after update")
        return role

    async def get_role_with_permissions(self, role_id: int) -> Role:
        """Get a role with its permissions.

        Raises:
            NotFoundError: The role does not exist.
        """
        role = await self._fetch_role(role_id)
        if role is None:
            raise NotFoundError("Role not found")
        return role

    async def list_roles_with_permissions(self) -> list[Role]:
        """List every role with its permissions, newest first."""
        rows = await self._db.fetch_all(
            _ROLE_WITH_PERMISSIONS + " GROUP BY r.id ORDER BY r.created_at DESC"
        )
        return [self._row_to_role(row) for row in rows]

    async def delete_role(self, role_id: int) -> None:
        """Delete a role. Its join rows go with it (ON DELETE CASCADE).

        Raises:
            NotFoundError: The role does not exist.
        """
        row = await self._db.fetch_one("DELETE FROM roles WHERE id = $1 RETURNING id", role_id)
        if row is None:
            raise NotFoundError("Role not found")
        logger.info("role_deleted", role_id=role_id)

    async def _fetch_role(self, role_id: int) -> Role | None:
        row = await self._db.fetch_one(
            _ROLE_WITH_PERMISSIONS + " WHERE r.id = $1 GROUP BY r.id",
            role_id,
        )
        return self._row_to_role(row) if row else None

    async def _insert_permissions(
        self, conn: "Connection", role_id: int, permission_ids: list[int]
    ) -> None:
        """Insert one join row per permission id."""
        if not permission_ids:
            return
        try:
            await conn.execute(
                """
                INSERT INTO role_permissions (role_id, permission_id)
                SELECT $1, unnest($2::int[])
                """,
                role_id,
                permission_ids,
            )
        except asyncpg.ForeignKeyViolationError as e:
            raise InvalidArgumentError("Unknown permission id") from e

    def _row_to_role(self, row: dict[str, Any]) -> Role:
        """Convert an aggregated database row to Role."""
        permissions = aggregate_permissions(row.get("permissions"))
        return Role(
            id=row["id"],
            title=row["title"],
            description=row.get("description"),
            permission_ids=[p.id for p in permissions],
            permissions=permissions,
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )
