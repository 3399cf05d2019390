"""Filter, search and pagination query building for list endpoints.

Every list endpoint shares the same shape: an optional free-text search
across a handful of text columns, equality filters on a few more, and
page/limit/sort options. ``build_list_query`` turns those inputs into a
data query and a count query that share one WHERE clause.

Column names reaching this module are trusted. Callers check filter keys
and the sort field against their own allow-list before calling; values are
always bound, never interpolated.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from backoffice.core.query.binder import ParameterBinder

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_SORT_BY = "created_at"
DEFAULT_SORT_ORDER = "desc"


@dataclass(frozen=True)
class PaginationOptions:
    """Raw pagination options as supplied by a caller. None means default."""

    page: int | None = None
    limit: int | None = None
    sort_by: str | None = None
    sort_order: str | None = None


@dataclass(frozen=True)
class Pagination:
    """Resolved pagination values."""

    page: int
    limit: int
    skip: int
    sort_by: str
    sort_order: str


@dataclass(frozen=True)
class ListQuery:
    """A data query and a count query sharing the same WHERE clause.

    Attributes:
        data_sql: SELECT with ORDER BY, LIMIT and OFFSET.
        count_sql: SELECT COUNT(*) with the same WHERE clause only.
        params: Parameters for ``data_sql``; the last two are limit and offset.
        page: Resolved page number.
        limit: Resolved page size.
    """

    data_sql: str
    count_sql: str
    params: list[Any]
    page: int
    limit: int

    @property
    def count_params(self) -> list[Any]:
        """Parameters for ``count_sql``: everything except limit and offset."""
        return self.params[:-2]


@dataclass
class PageMeta:
    """Pagination metadata returned with a page of results."""

    page: int
    limit: int
    total: int


@dataclass
class Page(Generic[T]):
    """One page of results plus its metadata."""

    data: list[T] = field(default_factory=list)
    meta: PageMeta = field(default_factory=lambda: PageMeta(DEFAULT_PAGE, DEFAULT_LIMIT, 0))


def calculate_pagination(
    options: PaginationOptions | None = None,
    default_limit: int = DEFAULT_LIMIT,
) -> Pagination:
    """Resolve pagination options against the defaults.

    Args:
        options: Caller supplied options. Missing or zero values fall back to
            the defaults.
        default_limit: Page size used when the caller gives none.

    Returns:
        Resolved pagination with ``skip = (page - 1) * limit``.
    """
    options = options or PaginationOptions()
    page = options.page or DEFAULT_PAGE
    limit = options.limit or default_limit
    sort_by = options.sort_by or DEFAULT_SORT_BY
    sort_order = "asc" if (options.sort_order or "").lower() == "asc" else DEFAULT_SORT_ORDER
    return Pagination(
        page=page,
        limit=limit,
        skip=(page - 1) * limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )


def build_where_clause(
    binder: ParameterBinder,
    filters: Mapping[str, Any] | None = None,
    search_term: str | None = None,
    search_fields: Sequence[str] = (),
) -> str:
    """Build a WHERE clause, binding values as it goes.

    The search term contributes one parenthesized OR group first, then each
    filter whose value is not None contributes an equality predicate, in
    mapping order. The ``%term%`` pattern is bound once and every column in
    the OR group reuses that placeholder.

    Args:
        binder: Binder receiving the values.
        filters: Column to value mapping. None values mean "no constraint".
        search_term: Free-text term matched with ILIKE.
        search_fields: Text columns the search term applies to.

    Returns:
        ``" WHERE ..."`` or an empty string when nothing constrains the query.
    """
    conditions: list[str] = []

    if search_term and search_fields:
        placeholder = binder.bind(f"%{search_term}%")
        group = " OR ".join(f"{column} ILIKE {placeholder}" for column in search_fields)
        conditions.append(f"({group})")

    for column, value in (filters or {}).items():
        if value is None:
            continue
        conditions.append(f"{column} = {binder.bind(value)}")

    if not conditions:
        return ""
    return " WHERE " + " AND ".join(conditions)


def build_list_query(
    table: str,
    filters: Mapping[str, Any] | None = None,
    search_term: str | None = None,
    search_fields: Sequence[str] = (),
    options: PaginationOptions | None = None,
    default_limit: int = DEFAULT_LIMIT,
    columns: str = "*",
) -> ListQuery:
    """Build a paginated list query and its matching count query.

    Placeholders are assigned left to right: search pattern, filters, limit,
    offset. The count query therefore takes exactly ``params[:-2]``.

    Args:
        table: Table to select from.
        filters: Column to value equality filters.
        search_term: Optional free-text search term.
        search_fields: Columns the search term is matched against.
        options: Pagination options.
        default_limit: Page size used when options carry none.
        columns: Select list for the data query.

    Returns:
        The query plan.
    """
    pagination = calculate_pagination(options, default_limit=default_limit)
    binder = ParameterBinder()

    where = build_where_clause(binder, filters, search_term, search_fields)

    order = f" ORDER BY {pagination.sort_by} {pagination.sort_order.upper()}"
    limit_placeholder = binder.bind(pagination.limit)
    offset_placeholder = binder.bind(pagination.skip)

    data_sql = (
        f"SELECT {columns} FROM {table}{where}{order}"
        f" LIMIT {limit_placeholder} OFFSET {offset_placeholder}"
    )
    count_sql = f"SELECT COUNT(*) FROM {table}{where}"

    return ListQuery(
        data_sql=data_sql,
        count_sql=count_sql,
        params=binder.values,
        page=pagination.page,
        limit=pagination.limit,
    )
