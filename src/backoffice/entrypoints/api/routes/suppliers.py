"""Supplier API routes."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from backoffice.adapters.entities import SuppliersRepository
from backoffice.core.catalog import Supplier
from backoffice.core.query import PaginationOptions
from backoffice.entrypoints.api.deps import get_suppliers_repo
from backoffice.entrypoints.api.schemas import (
    ApiResponse,
    envelope,
    page_envelope,
    pagination_params,
)

router = APIRouter(prefix="/suppliers", tags=["suppliers"])

SuppliersRepoDep = Annotated[SuppliersRepository, Depends(get_suppliers_repo)]
PaginationDep = Annotated[PaginationOptions, Depends(pagination_params)]

SupplierStatusValue = Literal["active", "inactive", "blacklisted"]


class SupplierBase(BaseModel):
    """Supplier fields shared by create and update."""

    description: str | None = None
    contact_person: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    country: str | None = None
    tax_id: str | None = None
    payment_terms: str | None = None
    credit_limit: Decimal | None = None
    current_balance: Decimal | None = None
    rating: int | None = Field(default=None, ge=1, le=5)
    notes: str | None = None


class SupplierCreate(SupplierBase):
    """Supplier creation request."""

    name: str = Field(..., min_length=1)
    status: SupplierStatusValue = "active"


class SupplierUpdate(SupplierBase):
    """Supplier update request."""

    name: str | None = Field(default=None, min_length=1)
    status: SupplierStatusValue | None = None


@router.post("", response_model=ApiResponse[Supplier], status_code=status.HTTP_201_CREATED)
async def create_supplier(body: SupplierCreate, repo: SuppliersRepoDep) -> dict[str, object]:
    """Create a supplier."""
    supplier = await repo.create(body.model_dump(exclude_none=True))
    return envelope("Supplier created successfully", supplier)


@router.get("", response_model=ApiResponse[list[Supplier]])
async def list_suppliers(
    repo: SuppliersRepoDep,
    pagination: PaginationDep,
    search_term: Annotated[str | None, Query(alias="searchTerm")] = None,
    supplier_status: Annotated[SupplierStatusValue | None, Query(alias="status")] = None,
    city: str | None = None,
    country: str | None = None,
    rating: Annotated[int | None, Query(ge=1, le=5)] = None,
) -> dict[str, object]:
    """List suppliers."""
    page = await repo.list(
        filters={"status": supplier_status, "city": city, "country": country, "rating": rating},
        search_term=search_term,
        options=pagination,
    )
    return page_envelope("Suppliers retrieved successfully", page)


@router.get("/{supplier_id}", response_model=ApiResponse[Supplier])
async def get_supplier(supplier_id: int, repo: SuppliersRepoDep) -> dict[str, object]:
    """Get a supplier."""
    return envelope("Supplier retrieved successfully", await repo.get(supplier_id))


@router.patch("/{supplier_id}", response_model=ApiResponse[Supplier])
async def update_supplier(
    supplier_id: int, body: SupplierUpdate, repo: SuppliersRepoDep
) -> dict[str, object]:
    """Update a supplier."""
    supplier = await repo.update(supplier_id, body.model_dump(exclude_unset=True))
    return envelope("Supplier updated successfully", supplier)


@router.delete("/{supplier_id}", response_model=ApiResponse[Supplier])
async def delete_supplier(supplier_id: int, repo: SuppliersRepoDep) -> dict[str, object]:
    """Delete a supplier and return it."""
    return envelope("Supplier deleted successfully", await repo.delete(supplier_id))
