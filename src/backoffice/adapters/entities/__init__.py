"""Single-table entity repositories."""

from backoffice.adapters.entities.base import TableRepository
from backoffice.adapters.entities.organizations_repository import OrganizationsRepository
from backoffice.adapters.entities.suppliers_repository import SuppliersRepository
from backoffice.adapters.entities.tags_repository import TagsRepository
from backoffice.adapters.entities.users_repository import UsersRepository

__all__ = [
    "OrganizationsRepository",
    "SuppliersRepository",
    "TableRepository",
    "TagsRepository",
    "UsersRepository",
]
