"""RBAC repositories."""

from backoffice.adapters.rbac.permissions_repository import PermissionsRepository
from backoffice.adapters.rbac.roles_repository import RolesRepository

__all__ = ["PermissionsRepository", "RolesRepository"]
