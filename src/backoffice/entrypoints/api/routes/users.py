"""User API routes."""

from __future__ import annotations

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from backoffice.adapters.entities import UsersRepository
from backoffice.core.auth import UserProfile
from backoffice.core.query import PaginationOptions
from backoffice.entrypoints.api.deps import get_users_repo
from backoffice.entrypoints.api.schemas import (
    ApiResponse,
    envelope,
    page_envelope,
    pagination_params,
)

router = APIRouter(prefix="/users", tags=["users"])

UsersRepoDep = Annotated[UsersRepository, Depends(get_users_repo)]
PaginationDep = Annotated[PaginationOptions, Depends(pagination_params)]

StatusValue = Literal["active", "suspended", "inactive"]


class UserCreate(BaseModel):
    """User creation request."""

    name: str = Field(..., min_length=1)
    email: EmailStr
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6)
    phone_number: str | None = None
    address: str | None = None
    organization_id: int
    image: str | None = None
    status: StatusValue = "active"
    role: int


class UserUpdate(BaseModel):
    """User update request. Only fields that are sent are changed."""

    name: str | None = None
    email: EmailStr | None = None
    username: str | None = None
    password: str | None = Field(default=None, min_length=6)
    phone_number: str | None = None
    address: str | None = None
    organization_id: int | None = None
    image: str | None = None
    status: StatusValue | None = None
    role: int | None = None


@router.post("", response_model=ApiResponse[UserProfile], status_code=status.HTTP_201_CREATED)
async def create_user(body: UserCreate, repo: UsersRepoDep) -> dict[str, object]:
    """Create a user."""
    user = await repo.create(body.model_dump())
    return envelope("User created successfully", user)


@router.get("", response_model=ApiResponse[list[UserProfile]])
async def list_users(
    repo: UsersRepoDep,
    pagination: PaginationDep,
    search_term: Annotated[str | None, Query(alias="searchTerm")] = None,
    user_status: Annotated[StatusValue | None, Query(alias="status")] = None,
    role: int | None = None,
    organization_id: Annotated[int | None, Query(alias="organizationId")] = None,
) -> dict[str, object]:
    """List users with search, filters and pagination."""
    page = await repo.list(
        filters={"status": user_status, "role": role, "organization_id": organization_id},
        search_term=search_term,
        options=pagination,
    )
    return page_envelope("Users retrieved successfully", page)


@router.get("/{user_id}", response_model=ApiResponse[UserProfile])
async def get_user(user_id: int, repo: UsersRepoDep) -> dict[str, object]:
    """Get a user."""
    return envelope("User retrieved successfully", await repo.get(user_id))


@router.patch("/{user_id}", response_model=ApiResponse[UserProfile])
async def update_user(user_id: int, body: UserUpdate, repo: UsersRepoDep) -> dict[str, object]:
    """Update the fields of a user that are present in the body."""
    user = await repo.update(user_id, body.model_dump(exclude_unset=True))
    return envelope("User updated successfully", user)


@router.delete("/{user_id}", response_model=ApiResponse[None])
async def delete_user(user_id: int, repo: UsersRepoDep) -> dict[str, object]:
    """Delete a user."""
    await repo.delete(user_id)
    return envelope("User deleted successfully")
