"""Domain-specific exceptions.

All exceptions in the backoffice system inherit from BackofficeError,
making it easy to catch all system errors while still being able
to handle specific error kinds.

The core signals abstract error kinds only. Translating a kind into a
transport status code is the job of the HTTP entrypoint.
"""

from __future__ import annotations


class BackofficeError(Exception):
    """Base exception for all backoffice errors.

    Attributes:
        message: Human readable description, safe to show to API clients.
    """

    def __init__(self, message: str) -> None:
        """Initialize BackofficeError.

        Args:
            message: Error description.
        """
        super().__init__(message)
        self.message = message


class NotFoundError(BackofficeError):
    """The requested entity does not exist."""

    pass


class UnauthorizedError(BackofficeError):
    """Supplied credentials did not match the stored credential state."""

    pass


class ForbiddenError(BackofficeError):
    """Account state or token does not permit the operation.

    Raised for suspended/inactive accounts and for refresh tokens that fail
    verification for any reason (expired, malformed, wrong secret).
    """

    pass


class InvalidArgumentError(BackofficeError):
    """Caller supplied an empty update payload or a field outside the allow-list."""

    pass


class ConflictError(BackofficeError):
    """A uniqueness constraint was violated."""

    pass


class InternalError(BackofficeError):
    """Unexpected storage failure.

    Always chained (``raise ... from exc``) to the original exception so the
    cause is kept in logs while API clients only see the message.
    """

    pass
