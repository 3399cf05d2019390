"""Role API routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from backoffice.adapters.rbac import RolesRepository
from backoffice.core.rbac import Role, RoleUpdate
from backoffice.entrypoints.api.deps import get_roles_repo
from backoffice.entrypoints.api.schemas import ApiResponse, envelope

router = APIRouter(prefix="/roles", tags=["roles"])

RolesRepoDep = Annotated[RolesRepository, Depends(get_roles_repo)]


class RoleCreate(BaseModel):
    """Role creation request."""

    title: str = Field(..., min_length=1)
    description: str | None = None
    permission_ids: list[int] = Field(default_factory=list)


class RolePatch(BaseModel):
    """Role update request.

    Sending ``permission_ids: []`` removes every permission from the role;
    leaving the key out keeps the current set.
    """

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    permission_ids: list[int] | None = None


@router.post("", response_model=ApiResponse[Role], status_code=status.HTTP_201_CREATED)
async def create_role(body: RoleCreate, repo: RolesRepoDep) -> dict[str, object]:
    """Create a role with its permissions."""
    role = await repo.create_role_with_permissions(
        body.title, body.description, body.permission_ids
    )
    return envelope("Role created successfully", role)


@router.get("", response_model=ApiResponse[list[Role]])
async def list_roles(repo: RolesRepoDep) -> dict[str, object]:
    """List roles with their permissions."""
    return envelope("Roles retrieved successfully", await repo.list_roles_with_permissions())


@router.get("/{role_id}", response_model=ApiResponse[Role])
async def get_role(role_id: int, repo: RolesRepoDep) -> dict[str, object]:
    """Get a role with its permissions."""
    return envelope("Role retrieved successfully", await repo.get_role_with_permissions(role_id))


@router.patch("/{role_id}", response_model=ApiResponse[Role])
async def update_role(role_id: int, body: RolePatch, repo: RolesRepoDep) -> dict[str, object]:
    """Update a role and/or replace its permission set."""
    patch = RoleUpdate(**body.model_dump(exclude_unset=True))
    role = await repo.update_role_with_permissions(role_id, patch)
    return envelope("Role updated successfully", role)


@router.delete("/{role_id}", response_model=ApiResponse[None])
async def delete_role(role_id: int, repo: RolesRepoDep) -> dict[str, object]:
    """Delete a role."""
    await repo.delete_role(role_id)
    return envelope("Role deleted successfully")
