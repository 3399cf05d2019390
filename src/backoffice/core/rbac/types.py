"""RBAC domain types."""

from datetime import datetime

from pydantic import BaseModel, Field


class Permission(BaseModel):
    """A permission that can be granted to roles."""

    id: int
    title: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PermissionSummary(BaseModel):
    """Permission as embedded in a role."""

    id: int
    title: str
    description: str | None = None


class Role(BaseModel):
    """A role together with its resolved permission set."""

    id: int
    title: str
    description: str | None = None
    permission_ids: list[int] = Field(default_factory=list)
    permissions: list[PermissionSummary] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RoleUpdate(BaseModel):
    """Patch for a role.

    Only fields the caller explicitly set take part in the update, so
    ``permission_ids=[]`` (clear every permission) is distinct from leaving
    ``permission_ids`` out (keep the current set).
    """

    title: str | None = None
    description: str | None = None
    permission_ids: list[int] | None = None

    @property
    def replaces_permissions(self) -> bool:
        """Whether the patch explicitly carries a permission list."""
        return "permission_ids" in self.model_fields_set and self.permission_ids is not None

    def column_changes(self) -> dict[str, str | None]:
        """Title/description fields the caller explicitly set."""
        return {
            name: getattr(self, name)
            for name in ("title", "description")
            if name in self.model_fields_set
        }
