"""Query building primitives shared by the repositories."""

from backoffice.core.query.binder import ParameterBinder
from backoffice.core.query.builder import (
    DEFAULT_LIMIT,
    ListQuery,
    Page,
    PageMeta,
    Pagination,
    PaginationOptions,
    build_list_query,
    build_where_clause,
    calculate_pagination,
)

__all__ = [
    "DEFAULT_LIMIT",
    "ListQuery",
    "Page",
    "PageMeta",
    "Pagination",
    "PaginationOptions",
    "ParameterBinder",
    "build_list_query",
    "build_where_clause",
    "calculate_pagination",
]
