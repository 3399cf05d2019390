"""Catalog domain types: suppliers and tags."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel


class SupplierStatus(str, Enum):
    """Supplier status."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    BLACKLISTED = "blacklisted"


class Supplier(BaseModel):
    """Supplier domain model."""

    id: int
    name: str
    description: str | None = None
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    tax_id: str | None = None
    payment_terms: str | None = None
    credit_limit: Decimal | None = None
    current_balance: Decimal | None = None
    status: SupplierStatus = SupplierStatus.ACTIVE
    rating: int | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Tag(BaseModel):
    """Tag domain model."""

    id: int
    name: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
