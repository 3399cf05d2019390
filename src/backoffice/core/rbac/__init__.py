"""Role-based access control domain."""

from backoffice.core.rbac.types import Permission, PermissionSummary, Role, RoleUpdate

__all__ = [
    "Permission",
    "PermissionSummary",
    "Role",
    "RoleUpdate",
]
