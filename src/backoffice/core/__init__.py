"""Core domain - business rules, query building and error kinds."""

from .exceptions import (
    BackofficeError,
    ConflictError,
    ForbiddenError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    UnauthorizedError,
)

__all__ = [
    "BackofficeError",
    "ConflictError",
    "ForbiddenError",
    "InternalError",
    "InvalidArgumentError",
    "NotFoundError",
    "UnauthorizedError",
]
