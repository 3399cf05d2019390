"""Organization API routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from backoffice.adapters.entities import OrganizationsRepository
from backoffice.core.auth import Organization
from backoffice.core.query import PaginationOptions
from backoffice.entrypoints.api.deps import get_organizations_repo
from backoffice.entrypoints.api.schemas import (
    ApiResponse,
    envelope,
    page_envelope,
    pagination_params,
)

router = APIRouter(prefix="/organizations", tags=["organizations"])

OrganizationsRepoDep = Annotated[OrganizationsRepository, Depends(get_organizations_repo)]
PaginationDep = Annotated[PaginationOptions, Depends(pagination_params)]


class OrganizationCreate(BaseModel):
    """Organization creation request."""

    name: str = Field(..., min_length=1)
    domain: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)


class OrganizationUpdate(BaseModel):
    """Organization update request."""

    name: str | None = Field(default=None, min_length=1)
    domain: str | None = Field(default=None, min_length=1)
    address: str | None = Field(default=None, min_length=1)


@router.post("", response_model=ApiResponse[Organization], status_code=status.HTTP_201_CREATED)
async def create_organization(
    body: OrganizationCreate, repo: OrganizationsRepoDep
) -> dict[str, object]:
    """Create an organization."""
    organization = await repo.create(body.model_dump())
    return envelope("Organization created successfully", organization)


@router.get("", response_model=ApiResponse[list[Organization]])
async def list_organizations(
    repo: OrganizationsRepoDep,
    pagination: PaginationDep,
    search_term: Annotated[str | None, Query(alias="searchTerm")] = None,
    domain: str | None = None,
) -> dict[str, object]:
    """List organizations."""
    page = await repo.list(filters={"domain": domain}, search_term=search_term, options=pagination)
    return page_envelope("Organizations retrieved successfully", page)


@router.get("/{organization_id}", response_model=ApiResponse[Organization])
async def get_organization(organization_id: int, repo: OrganizationsRepoDep) -> dict[str, object]:
    """Get an organization."""
    return envelope("Organization retrieved successfully", await repo.get(organization_id))


@router.patch("/{organization_id}", response_model=ApiResponse[Organization])
async def update_organization(
    organization_id: int, body: OrganizationUpdate, repo: OrganizationsRepoDep
) -> dict[str, object]:
    """Update an organization."""
    organization = await repo.update(organization_id, body.model_dump(exclude_unset=True))
    return envelope("Organization updated successfully", organization)


@router.delete("/{organization_id}", response_model=ApiResponse[None])
async def delete_organization(
    organization_id: int, repo: OrganizationsRepoDep
) -> dict[str, object]:
    """Delete an organization."""
    await repo.delete(organization_id)
    return envelope("Organization deleted successfully")
