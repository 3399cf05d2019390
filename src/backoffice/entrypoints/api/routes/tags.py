"""Tag API routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from backoffice.adapters.entities import TagsRepository
from backoffice.core.catalog import Tag
from backoffice.core.query import PaginationOptions
from backoffice.entrypoints.api.deps import get_tags_repo
from backoffice.entrypoints.api.schemas import (
    ApiResponse,
    envelope,
    page_envelope,
    pagination_params,
)

router = APIRouter(prefix="/tags", tags=["tags"])

TagsRepoDep = Annotated[TagsRepository, Depends(get_tags_repo)]
PaginationDep = Annotated[PaginationOptions, Depends(pagination_params)]


class TagCreate(BaseModel):
    """Tag creation request."""

    name: str = Field(..., min_length=1)
    description: str | None = None


class TagUpdate(BaseModel):
    """Tag update request."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None


@router.post("", response_model=ApiResponse[Tag], status_code=status.HTTP_201_CREATED)
async def create_tag(body: TagCreate, repo: TagsRepoDep) -> dict[str, object]:
    """Create a tag."""
    return envelope("Tag created successfully", await repo.create(body.model_dump()))


@router.get("", response_model=ApiResponse[list[Tag]])
async def list_tags(
    repo: TagsRepoDep,
    pagination: PaginationDep,
    search_term: Annotated[str | None, Query(alias="searchTerm")] = None,
) -> dict[str, object]:
    """List tags."""
    page = await repo.list(search_term=search_term, options=pagination)
    return page_envelope("Tags retrieved successfully", page)


@router.get("/{tag_id}", response_model=ApiResponse[Tag])
async def get_tag(tag_id: int, repo: TagsRepoDep) -> dict[str, object]:
    """Get a tag."""
    return envelope("Tag retrieved successfully", await repo.get(tag_id))


@router.patch("/{tag_id}", response_model=ApiResponse[Tag])
async def update_tag(tag_id: int, body: TagUpdate, repo: TagsRepoDep) -> dict[str, object]:
    """Update a tag."""
    tag = await repo.update(tag_id, body.model_dump(exclude_unset=True))
    return envelope("Tag updated successfully", tag)


@router.delete("/{tag_id}", response_model=ApiResponse[Tag])
async def delete_tag(tag_id: int, repo: TagsRepoDep) -> dict[str, object]:
    """Delete a tag and return it."""
    return envelope("Tag deleted successfully", await repo.delete(tag_id))
