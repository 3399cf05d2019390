"""Permission API routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from backoffice.adapters.rbac import PermissionsRepository
from backoffice.core.query import PaginationOptions
from backoffice.core.rbac import Permission
from backoffice.entrypoints.api.deps import get_permissions_repo
from backoffice.entrypoints.api.schemas import (
    ApiResponse,
    envelope,
    page_envelope,
    pagination_params,
)

router = APIRouter(prefix="/permissions", tags=["permissions"])

PermissionsRepoDep = Annotated[PermissionsRepository, Depends(get_permissions_repo)]
PaginationDep = Annotated[PaginationOptions, Depends(pagination_params)]


class PermissionCreate(BaseModel):
    """Permission creation request."""

    title: str = Field(..., min_length=1)
    description: str | None = None


class PermissionUpdate(BaseModel):
    """Permission update request."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None


@router.post("", response_model=ApiResponse[Permission], status_code=status.HTTP_201_CREATED)
async def create_permission(body: PermissionCreate, repo: PermissionsRepoDep) -> dict[str, object]:
    """Create a permission."""
    permission = await repo.create(body.model_dump())
    return envelope("Permission created successfully", permission)


@router.get("", response_model=ApiResponse[list[Permission]])
async def list_permissions(
    repo: PermissionsRepoDep,
    pagination: PaginationDep,
    search_term: Annotated[str | None, Query(alias="searchTerm")] = None,
    title: str | None = None,
) -> dict[str, object]:
    """List permissions."""
    page = await repo.list(filters={"title": title}, search_term=search_term, options=pagination)
    return page_envelope("Permissions retrieved successfully", page)


@router.get("/{permission_id}", response_model=ApiResponse[Permission])
async def get_permission(permission_id: int, repo: PermissionsRepoDep) -> dict[str, object]:
    """Get a permission."""
    return envelope("Permission retrieved successfully", await repo.get(permission_id))


@router.patch("/{permission_id}", response_model=ApiResponse[Permission])
async def update_permission(
    permission_id: int, body: PermissionUpdate, repo: PermissionsRepoDep
) -> dict[str, object]:
    """Update a permission."""
    permission = await repo.update(permission_id, body.model_dump(exclude_unset=True))
    return envelope("Permission updated successfully", permission)


@router.delete("/{permission_id}", response_model=ApiResponse[None])
async def delete_permission(permission_id: int, repo: PermissionsRepoDep) -> dict[str, object]:
    """Delete a permission."""
    await repo.delete(permission_id)
    return envelope("Permission deleted successfully")
