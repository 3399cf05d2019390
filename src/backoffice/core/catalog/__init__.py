"""Catalog domain."""

from backoffice.core.catalog.types import Supplier, SupplierStatus, Tag

__all__ = ["Supplier", "SupplierStatus", "Tag"]
