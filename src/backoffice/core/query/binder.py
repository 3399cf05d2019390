"""Positional parameter binding for asyncpg queries."""

from __future__ import annotations

from typing import Any


class ParameterBinder:
    """Collects query values and hands out ``$n`` placeholders.

    Placeholders are numbered strictly in the order values are bound, so the
    n-th call to :meth:`bind` always returns ``$n``. Query builders rely on
    this to slice a prefix of :attr:`values` for a second query that shares
    the same WHERE clause.

    Example:
        >>> binder = ParameterBinder()
        >>> binder.bind("active")
        '$1'
        >>> binder.bind(10)
        '$2'
        >>> binder.values
        ['active', 10]
    """

    def __init__(self, start: int = 1) -> None:
        """Initialize the binder.

        Args:
            start: Number of the first placeholder. Use this when a query
                already binds fixed parameters ahead of the dynamic ones.
        """
        self._start = start
        self._values: list[Any] = []

    def bind(self, value: Any) -> str:
        """Bind a value and return its placeholder."""
        self._values.append(value)
        return f"${self._start + len(self._values) - 1}"

    def bind_many(self, values: list[Any]) -> list[str]:
        """Bind several values in order and return their placeholders."""
        return [self.bind(value) for value in values]

    @property
    def values(self) -> list[Any]:
        """Bound values in placeholder order."""
        return list(self._values)

    @property
    def next_placeholder(self) -> str:
        """Placeholder the next bound value will receive."""
        return f"${self._start + len(self._values)}"

    def __len__(self) -> int:
        return len(self._values)
