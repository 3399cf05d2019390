"""Response envelopes and shared query parameters."""

from __future__ import annotations

from typing import Annotated, Any, Generic, Literal, TypeVar

from fastapi import Query
from pydantic import BaseModel

from backoffice.core.query import Page, PaginationOptions

T = TypeVar("T")


class PageMetaResponse(BaseModel):
    """Pagination metadata."""

    page: int
    limit: int
    total: int


class ApiResponse(BaseModel, Generic[T]):
    """Envelope for every successful response."""

    success: bool = True
    message: str
    data: T | None = None
    meta: PageMetaResponse | None = None


def envelope(message: str, data: Any = None) -> dict[str, Any]:
    """Wrap a single result."""
    return {"success": True, "message": message, "data": data}


def page_envelope(message: str, page: Page[Any]) -> dict[str, Any]:
    """Wrap a page of results with its metadata."""
    return {
        "success": True,
        "message": message,
        "data": page.data,
        "meta": {"page": page.meta.page, "limit": page.meta.limit, "total": page.meta.total},
    }


def pagination_params(
    page: Annotated[int | None, Query(ge=1)] = None,
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[Literal["asc", "desc"] | None, Query(alias="sortOrder")] = None,
) -> PaginationOptions:
    """Collect pagination query parameters."""
    return PaginationOptions(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)
